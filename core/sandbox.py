"""Sandbox -- the only object a page module ever receives.

Wraps the browser library, the widget decorators and the event bus
behind a narrow API. A module holding a Sandbox can't reach the
container, other modules, or the rest of the library. For tests,
build one around fakes:

    sandbox = Sandbox(fake_library, fake_widgets, EventBus(fake_library))
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class XhrRequest:
    """Arguments for library.xhr()."""
    url: str
    http_verb: str = "GET"
    data: Any = None
    success: Optional[Callable[[Any], Any]] = None
    failure: Optional[Callable[[Any], Any]] = None


class _Frozen:
    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is read-only")


class SandboxWidgets(_Frozen):
    """Widget decorators exposed to modules."""

    __slots__ = ("_widgets",)

    def __init__(self, widgets):
        object.__setattr__(self, "_widgets", widgets)

    def simple_widget(self, selector: str):
        self._widgets.decorators.simple_widget(selector)

    def editable_title(self, selector: str, callback: Callable[[str], Any]):
        self._widgets.decorators.editable_title(selector, callback)

    def simple_editable(self, selector: str):
        self._widgets.decorators.simple_editable(selector)


class Sandbox(_Frozen):
    """Facade over library, widgets and events."""

    __slots__ = ("_library", "_events", "widgets")

    def __init__(self, library, widgets, events):
        object.__setattr__(self, "_library", library)
        object.__setattr__(self, "_events", events)
        object.__setattr__(self, "widgets", SandboxWidgets(widgets))

    # library

    def xhr(self, url: str, http_verb: str = "GET", data: Any = None,
            success: Optional[Callable] = None, failure: Optional[Callable] = None):
        self._library.xhr(XhrRequest(
            url=url,
            http_verb=http_verb,
            data=data,
            success=success,
            failure=failure,
        ))

    def get_element_by_id(self, element_id: str):
        return self._library.get_element_by_id(element_id)

    def log(self, severity: str, message: str):
        self._library.log(severity, message)

    # events

    def register(self, event_type: str, callback: Callable):
        self._events.register(event_type, callback)

    def publish(self, event_type: str, data: Any = None):
        self._events.publish(event_type, data)

    def detach(self, event_type: str, callback: Callable):
        self._events.detach(event_type, callback)

    def detach_all(self):
        self._events.detach_all()
