"""Base page module for Hummingbird.

A module is the HTML, CSS and behaviour of one self-contained page
component. The container builds it by calling builder(sandbox), then
drives it through init() -> render() -> destroy().

init() runs once the instance exists, render() once every module is
initialized (it may be a no-op when the HTML is already on the page),
and destroy() on page unload so the module can drop its listeners.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LIFECYCLE_METHODS = ("init", "render", "destroy")


def conforms(obj: Any) -> bool:
    """True when obj (class or instance) provides callable init/render/destroy."""
    if isinstance(obj, type) and issubclass(obj, PageModule):
        return not getattr(obj, "__abstractmethods__", None)
    return all(callable(getattr(obj, name, None)) for name in LIFECYCLE_METHODS)


class PageModule(ABC):
    """Abstract page module. Subclasses only ever touch self.sandbox."""

    def __init__(self, sandbox, config: Optional[Dict] = None):
        self.sandbox = sandbox
        self.module_config = dict(config or {})

    @abstractmethod
    def init(self):
        """Attach widgets and listeners. Runs on start."""
        ...

    @abstractmethod
    def render(self):
        """Show the module. Runs after every module has been started."""
        ...

    @abstractmethod
    def destroy(self):
        """Release listeners. Runs on page unload."""
        ...
