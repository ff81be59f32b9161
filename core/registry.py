"""Builder catalog for Hummingbird page modules.

Register module types by name. The web app reads the page config
(YAML) and looks builders up here to register each configured module
with the container. The catalog only holds classes, never live
module instances -- those belong to the container.

Usage:
    @register_module("notes")
    class NotesModule(PageModule):
        ...
"""

import logging
from typing import Callable, Dict, List, Optional

from core.base_module import conforms
from core.errors import InvalidModule

logger = logging.getLogger(__name__)


class BuilderCatalog:
    """Maps module type names to module classes."""

    def __init__(self):
        self._types: Dict[str, type] = {}

    def register(self, type_name: str):
        """Decorator to register a module class by type name."""
        def decorator(cls):
            if not conforms(cls):
                raise InvalidModule(
                    f"{cls.__name__} must provide init(), render() and destroy()",
                    type_name,
                )
            self._types[type_name] = cls
            logger.debug("Registered module type: %s -> %s", type_name, cls.__name__)
            return cls
        return decorator

    def get(self, type_name: str) -> Optional[type]:
        return self._types.get(type_name)

    def builder_for(self, type_name: str, config: Optional[Dict] = None) -> Optional[Callable]:
        """Return a builder(sandbox) for type_name, bound to config."""
        cls = self._types.get(type_name)
        if cls is None:
            return None
        options = dict(config or {})

        def builder(sandbox):
            return cls(sandbox, options)

        builder.__name__ = f"build_{type_name}"
        return builder

    def types(self) -> List[str]:
        return sorted(self._types)

    def __contains__(self, type_name):
        return type_name in self._types


MODULE_CATALOG = BuilderCatalog()


def register_module(type_name: str):
    """Decorator to register a module class in the default catalog."""
    return MODULE_CATALOG.register(type_name)
