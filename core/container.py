"""Module container -- manages the lifecycle of every page module.

Each module is registered under a unique name with a builder. The
container moves it through

    REGISTERED --start--> STARTED --render--> RENDERED --destroy--> DESTROYED

one explicit call at a time. Anything raised from inside module code
(the builder, init, render, destroy) is caught and logged at ERROR via
the library so one broken module can't break the rest of the page.
Wiring mistakes (unknown name, duplicate name, lifecycle out of order)
are raised to the caller.

Start policy: a builder failure stores nothing and leaves the entry as
it was. Once the builder returns a valid instance it is stored and the
entry is STARTED even if init() then fails, so render/destroy still
have something to act on. render and destroy likewise move the state
whether or not the module method raised; the failure is kept in
last_error.

For testing, pass in fakes:

    container = ModuleContainer(fake_library, fake_sandbox)
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from core.base_module import LIFECYCLE_METHODS, conforms
from core.errors import (
    AlreadyRegistered,
    InvalidArgument,
    InvalidModule,
    NotFound,
    NotStarted,
)

logger = logging.getLogger(__name__)


class ModuleState(Enum):
    REGISTERED = "registered"
    STARTED = "started"
    RENDERED = "rendered"
    DESTROYED = "destroyed"


@dataclass
class ModuleEntry:
    """Container bookkeeping for one registered module."""
    name: str
    builder: Callable[[Any], Any]
    instance: Optional[Any] = None
    state: ModuleState = ModuleState.REGISTERED
    last_error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "state": self.state.value,
            "started": self.instance is not None,
            "last_error": self.last_error,
        }


class ModuleContainer:
    """Registry of page modules keyed by name."""

    def __init__(self, library, sandbox):
        self._library = library
        self._sandbox = sandbox
        self._modules: Dict[str, ModuleEntry] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, builder: Callable[[Any], Any]):
        """Add a module under name. builder(sandbox) must return the instance."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument(
                f"cannot register module {name!r}: name must be a non-empty string",
                name,
            )
        if not callable(builder):
            raise InvalidArgument(
                f"cannot register module {name}: builder {builder!r} is not callable",
                name,
            )
        if isinstance(builder, type) and not conforms(builder):
            raise InvalidModule(
                f"cannot register module {name}: {builder.__name__} must provide "
                + ", ".join(f"{m}()" for m in LIFECYCLE_METHODS),
                name,
            )

        with self._lock:
            if name in self._modules:
                raise AlreadyRegistered(
                    f"Cannot register module {name}: it is already registered.",
                    name,
                )
            self._modules[name] = ModuleEntry(name=name, builder=builder)
        logger.debug("Registered module %s", name)

    def unregister(self, name: str):
        """Drop the entry. The instance, if any, is not destroyed."""
        with self._lock:
            if name not in self._modules:
                raise NotFound(
                    f"Cannot unregister module {name}: it does not exist in the registry.",
                    name,
                )
            del self._modules[name]
        logger.debug("Unregistered module %s", name)

    def has_module(self, name: str) -> bool:
        with self._lock:
            return name in self._modules

    def state_of(self, name: str) -> ModuleState:
        return self._entry(name, "look up").state

    def names(self) -> List[str]:
        """Module names in registration order."""
        with self._lock:
            return list(self._modules)

    def describe(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [entry.as_dict() for entry in self._modules.values()]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, name: str):
        """Build the module with the sandbox and call its init()."""
        entry = self._entry(name, "initialize")

        try:
            instance = entry.builder(self._sandbox)
            if not conforms(instance):
                raise InvalidModule(
                    f"builder returned {instance!r}, which lacks init/render/destroy",
                    name,
                )
        except Exception as exc:
            self._fail(entry, "initialize", exc)
            return

        entry.instance = instance
        entry.state = ModuleState.STARTED
        entry.last_error = None
        try:
            instance.init()
        except Exception as exc:
            self._fail(entry, "initialize", exc)
            return
        logger.info("Module %s started", name)

    def start_all(self):
        for name in self.names():
            self.start(name)

    def render(self, name: str):
        """Call render() on a started module."""
        entry = self._started_entry(name, "render")
        entry.state = ModuleState.RENDERED
        try:
            entry.instance.render()
        except Exception as exc:
            self._fail(entry, "render", exc)

    def render_all(self):
        self._for_each_started("render", self.render)

    def destroy(self, name: str):
        """Call destroy() on a started module. The entry stays registered."""
        entry = self._started_entry(name, "destroy")
        entry.state = ModuleState.DESTROYED
        try:
            entry.instance.destroy()
        except Exception as exc:
            self._fail(entry, "destroy", exc)

    def destroy_all(self):
        """Destroy every started module. Used on page unload."""
        self._for_each_started("destroy", self.destroy)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entry(self, name: str, action: str) -> ModuleEntry:
        with self._lock:
            entry = self._modules.get(name)
        if entry is None:
            raise NotFound(
                f"Unable to {action} module {name}: module not found in registry.",
                name,
            )
        return entry

    def _started_entry(self, name: str, action: str) -> ModuleEntry:
        entry = self._entry(name, action)
        if entry.instance is None:
            raise NotStarted(
                f"Unable to {action} module {name}: it has not been started.",
                name,
            )
        return entry

    def _for_each_started(self, action: str, fn: Callable[[str], None]):
        with self._lock:
            entries = list(self._modules.values())
        for entry in entries:
            if entry.instance is None:
                self._library.log(
                    "WARN", f"Skipping {action} of module {entry.name}: not started."
                )
                continue
            fn(entry.name)

    def _fail(self, entry: ModuleEntry, action: str, exc: Exception):
        entry.last_error = str(exc)
        self._library.log(
            "ERROR", f"Unable to {action} module {entry.name}: {exc}"
        )
