"""Event registry and dispatcher for Hummingbird.

Modules talk to each other only through this bus (via their sandbox).
Publishing is synchronous: every subscriber runs before publish()
returns. A subscriber that raises is logged and skipped so one broken
listener can't take the rest of the page down with it.

While a subscriber runs, the browser library is bound as the dispatch
context and can be fetched with current_library().
"""

import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Dict, List, Optional

from core.errors import DuplicateSubscription, InvalidArgument, UnknownEventType

logger = logging.getLogger(__name__)

_dispatch_library: ContextVar = ContextVar("hummingbird_dispatch_library", default=None)


def current_library() -> Optional[Any]:
    """Return the library bound by the publish() currently running, if any."""
    return _dispatch_library.get()


@contextmanager
def _bound(library):
    token = _dispatch_library.set(library)
    try:
        yield library
    finally:
        _dispatch_library.reset(token)


class EventBus:
    """Publish/subscribe bus keyed by event type."""

    def __init__(self, library):
        self._library = library
        self._listeners: Dict[str, List[Callable]] = {}
        self._lock = threading.RLock()

    def register(self, event_type: str, callback: Callable):
        """Subscribe callback to event_type, after any existing subscribers.

        Callbacks are compared with ==, so obj.method registered twice
        counts as the same callback.
        """
        if not callable(callback):
            raise InvalidArgument(
                f"callback passed to event type {event_type!r} is not callable: {callback!r}",
                event_type,
            )
        if not isinstance(event_type, str) or not event_type.strip():
            raise InvalidArgument(
                f"cannot register event type {event_type!r}: not a non-empty string",
                event_type,
            )

        with self._lock:
            callbacks = self._listeners.setdefault(event_type, [])
            if any(cb == callback for cb in callbacks):
                raise DuplicateSubscription(
                    f"callback {callback!r} is already registered for {event_type!r}",
                    event_type,
                )
            callbacks.append(callback)
        logger.debug("Registered listener for %s: %r", event_type, callback)

    def detach(self, event_type: str, callback: Callable):
        """Remove every occurrence of callback from event_type."""
        with self._lock:
            if event_type not in self._listeners:
                raise UnknownEventType(
                    f"cannot detach listener from event {event_type!r}: "
                    "no listeners exist for that event",
                    event_type,
                )
            remaining = [cb for cb in self._listeners[event_type] if cb != callback]
            if remaining:
                self._listeners[event_type] = remaining
            else:
                del self._listeners[event_type]

    def detach_all(self):
        """Drop every subscription."""
        with self._lock:
            self._listeners.clear()
        logger.debug("All listeners detached")

    def publish(self, event_type: str, data: Any = None):
        """Deliver data to each subscriber of event_type, in registration order."""
        with self._lock:
            callbacks = list(self._listeners.get(event_type, []))

        if not callbacks:
            self._library.log(
                "INFO",
                f"Event {event_type} was published, but has no registered listeners.",
            )
            return

        with _bound(self._library):
            for callback in callbacks:
                try:
                    callback(data)
                except Exception as exc:
                    self._library.log(
                        "ERROR",
                        f"events.publish uncaught error in {event_type} listener: {exc}",
                    )

    def has_listeners(self, event_type: str) -> bool:
        with self._lock:
            return event_type in self._listeners

    def event_types(self) -> List[str]:
        with self._lock:
            return list(self._listeners)
