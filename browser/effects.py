"""Effect channel -- carries visual-effect directives to the browser.

The library records each effect (editable, draggable, resizable) here.
Browsers read the applied list on load and then follow the SSE stream
for effects applied later, e.g. by a module started after page load.
"""

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Full, Queue
from typing import Any, Dict, List

from config import SSE_KEEPALIVE, SSE_QUEUE_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Effect:
    """One effect directive: what to do to which selector."""
    kind: str
    selector: str
    options: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "selector": self.selector, "options": dict(self.options)}


class EffectChannel:
    """Thread-safe record of applied effects with SSE fan-out."""

    def __init__(self, queue_size: int = SSE_QUEUE_SIZE, keepalive: float = SSE_KEEPALIVE):
        self._applied: List[Effect] = []
        self._lock = threading.Lock()
        self._sse_clients: List[Queue] = []
        self._queue_size = queue_size
        self._keepalive = keepalive

    def publish(self, effect: Effect):
        """Record an effect and push it to connected clients (non-blocking)."""
        with self._lock:
            self._applied.append(effect)
            clients = list(self._sse_clients)

        dead = []
        for q in clients:
            try:
                q.put_nowait(effect)
            except Full:
                dead.append(q)
        if dead:
            logger.warning("Dropping %d stalled effect stream client(s)", len(dead))
            with self._lock:
                for q in dead:
                    if q in self._sse_clients:
                        self._sse_clients.remove(q)

    def applied(self) -> List[Effect]:
        with self._lock:
            return list(self._applied)

    def clear(self):
        with self._lock:
            self._applied.clear()

    def client_count(self) -> int:
        with self._lock:
            return len(self._sse_clients)

    def sse_stream(self):
        """Generator for SSE clients. Yields (event, effect) tuples.

        Usage in Flask:
            def stream():
                for event, effect in channel.sse_stream():
                    yield f"event: {event}\\ndata: {json.dumps(effect.as_dict())}\\n\\n"
        """
        q = Queue(maxsize=self._queue_size)
        with self._lock:
            self._sse_clients.append(q)
        try:
            while True:
                try:
                    yield "effect", q.get(timeout=self._keepalive)
                except Empty:
                    yield "keepalive", None
        finally:
            with self._lock:
                if q in self._sse_clients:
                    self._sse_clients.remove(q)
