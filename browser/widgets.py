"""Widget decorators -- canned combinations of library effects.

All UI effects are defined here in one place; modules just name the
decorator they want (through their sandbox). That keeps module code
independent of the effect implementation.

For testing, pass in a fake library:

    widgets = Widgets(fake_library)
"""

import logging
from typing import Any, Callable

from config import EDITABLE_TITLE_OPTIONS, SIMPLE_EDITABLE_OPTIONS, WIDGET_HANDLE_SUFFIX

logger = logging.getLogger(__name__)


class Decorators:
    """Decorate elements that are already on the page."""

    def __init__(self, library):
        self._library = library

    def simple_editable(self, selector: str):
        """Basic textarea in-place editor. The submitted text is kept as-is."""
        def keep_value(value, settings):
            return value

        self._library.fx.editable(selector, keep_value, dict(SIMPLE_EDITABLE_OPTIONS))

    def editable_title(self, selector: str, callback: Callable[[str], Any]):
        """Single-line in-place editor that reports the new text to callback."""
        def notify(value, settings):
            callback(value)
            return value

        self._library.fx.editable(selector, notify, dict(EDITABLE_TITLE_OPTIONS))

    def simple_widget(self, selector: str):
        """Draggable (by its -handle child) and resizable panel."""
        handle = selector + WIDGET_HANDLE_SUFFIX
        self._library.fx.draggable(selector, {"handle": handle})
        self._library.fx.resizable(selector)
        logger.debug("simple_widget on %s (handle %s)", selector, handle)


class Widgets:
    """Holder for the decorators; room for templates later."""

    def __init__(self, library):
        self.decorators = Decorators(library)
