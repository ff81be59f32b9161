"""Core framework for Hummingbird page modules.

Keeps module code away from the browser library, from UI effects and
from each other, so a module can be tested with nothing but a fake
sandbox.

Architecture:
    EventBus        -- registry/dispatcher, delivers published data to listeners
    Sandbox         -- the only API a module sees (widgets, xhr, log, events)
    ModuleContainer -- registers modules and drives init/render/destroy
    PageModule      -- base class for module implementations
    Registry        -- catalog of module types for config-driven pages
"""

from core.errors import (
    AlreadyRegistered,
    DuplicateSubscription,
    HummingbirdError,
    InvalidArgument,
    InvalidModule,
    NotFound,
    NotStarted,
    UnknownEventType,
)
from core.event_bus import EventBus, current_library
from core.sandbox import Sandbox, XhrRequest
from core.base_module import PageModule, conforms
from core.container import ModuleContainer, ModuleEntry, ModuleState
from core.registry import MODULE_CATALOG, BuilderCatalog, register_module

__all__ = [
    "AlreadyRegistered",
    "DuplicateSubscription",
    "HummingbirdError",
    "InvalidArgument",
    "InvalidModule",
    "NotFound",
    "NotStarted",
    "UnknownEventType",
    "EventBus",
    "current_library",
    "Sandbox",
    "XhrRequest",
    "PageModule",
    "conforms",
    "ModuleContainer",
    "ModuleEntry",
    "ModuleState",
    "MODULE_CATALOG",
    "BuilderCatalog",
    "register_module",
]
