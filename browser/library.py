"""Browser library -- the one place that knows how the page is served.

Everything else in the app talks to the browser through this object:
visual effects (fx), HTTP requests (xhr), logging (log) and element
lookup (get_element_by_id). Swapping the transport later means
rewriting this file and nothing else.

For testing, pass in a page, a channel and a stub session:

    library = BrowserLibrary(Page("<div id='x'></div>"), EffectChannel(), session=stub)
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

import requests

from browser.effects import Effect, EffectChannel
from browser.page import Element, Page
from config import SEVERITIES, TRACE_LEVEL, XHR_TIMEOUT, XHR_VERBS
from core.errors import InvalidArgument, NotFound
from core.sandbox import XhrRequest

logger = logging.getLogger(__name__)

logging.addLevelName(TRACE_LEVEL, "TRACE")


class Effects:
    """Cross-browser visual effects. See widgets for stored combinations."""

    def __init__(self, channel: EffectChannel):
        self._channel = channel
        self._editors: Dict[str, Tuple[Callable, Dict]] = {}
        self._lock = threading.Lock()

    def editable(self, selector: str, callback: Callable[[str, Dict], Any],
                 options: Optional[Dict] = None):
        """In-place editor on selector. callback(value, options) returns the value to insert."""
        if not callable(callback):
            raise InvalidArgument(f"editable callback for {selector} is not callable", selector)
        opts = dict(options or {})
        with self._lock:
            self._editors[selector] = (callback, opts)
        self._channel.publish(Effect("editable", selector, opts))

    def draggable(self, selector: str, options: Optional[Dict] = None):
        self._channel.publish(Effect("draggable", selector, dict(options or {})))

    def resizable(self, selector: str, options: Optional[Dict] = None):
        self._channel.publish(Effect("resizable", selector, dict(options or {})))

    def submit_edit(self, selector: str, value: str) -> Any:
        """Run the editor callback for an edit submitted by the browser."""
        with self._lock:
            editor = self._editors.get(selector)
        if editor is None:
            raise NotFound(f"No editable attached to {selector}", selector)
        callback, opts = editor
        return callback(value, opts)

    def has_editor(self, selector: str) -> bool:
        with self._lock:
            return selector in self._editors


class BrowserLibrary:
    """Browser abstraction handed to the widgets, the bus and the sandbox."""

    def __init__(self, page: Page, channel: EffectChannel,
                 session: Optional[requests.Session] = None,
                 timeout: float = XHR_TIMEOUT):
        self.page = page
        self.channel = channel
        self.fx = Effects(channel)
        self._session = session or requests.Session()
        self._timeout = timeout

    def xhr(self, req: XhrRequest):
        """Perform an HTTP call. Exactly one of success/failure is called."""
        verb = (req.http_verb or "GET").upper()
        if verb not in XHR_VERBS:
            raise InvalidArgument(f"unsupported http verb {req.http_verb!r} for {req.url}", req.http_verb)
        kwargs = {"timeout": self._timeout}
        if req.data is not None:
            if verb in ("GET", "HEAD", "DELETE"):
                kwargs["params"] = req.data
            elif isinstance(req.data, (dict, list)):
                kwargs["json"] = req.data
            else:
                kwargs["data"] = req.data

        try:
            resp = self._session.request(verb, req.url, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("xhr %s %s failed: %s", verb, req.url, exc)
            if req.failure:
                req.failure(exc)
            return

        if req.success:
            req.success(_decode(resp))

    def log(self, severity: str, message: str):
        """Lowest-level logging. severity is TRACE/DEBUG/INFO/WARN/ERROR/FATAL."""
        tag = str(severity).upper()
        level = SEVERITIES.get(tag)
        if level is None:
            logger.info("%s: %s", severity, message)
            return
        logger.log(level, "%s", message)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self.page.get_element_by_id(element_id)

    def close(self):
        self._session.close()


def _decode(resp: requests.Response) -> Any:
    content_type = resp.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return resp.json()
        except ValueError:
            logger.debug("Response from %s claimed JSON but didn't parse", resp.url)
    return resp.text
