"""Status module -- fetches a JSON status document and announces it.

Fetches on render and again whenever "status.refresh" is published.
Also tracks the latest notes title it hears about, to show that
modules only ever meet through the event bus.

Config example (in dashboard.yaml):
    modules:
      - name: "status"
        type: "status"
        url: "https://www.githubstatus.com/api/v2/status.json"
"""

from typing import Any, Dict, Optional

from core.base_module import PageModule
from core.registry import register_module
from modules.notes_module import RENAMED

REFRESH = "status.refresh"
LOADED = "status.loaded"
FAILED = "status.failed"


@register_module("status")
class StatusModule(PageModule):
    """Polls a status endpoint on demand."""

    def __init__(self, sandbox, config: Optional[Dict] = None):
        super().__init__(sandbox, config)
        self.url = self.module_config.get("url", "")
        self.http_verb = self.module_config.get("http_verb", "GET")
        self.last_status: Any = None
        self.notes_title: Optional[str] = None

    def init(self):
        self.sandbox.register(REFRESH, self._on_refresh)
        self.sandbox.register(RENAMED, self._on_notes_renamed)

    def render(self):
        self.refresh()

    def destroy(self):
        self.sandbox.detach(REFRESH, self._on_refresh)
        self.sandbox.detach(RENAMED, self._on_notes_renamed)

    def refresh(self):
        if not self.url:
            self.sandbox.log("WARN", "Status module has no url configured")
            return
        self.sandbox.xhr(
            url=self.url,
            http_verb=self.http_verb,
            success=self._on_success,
            failure=self._on_failure,
        )

    def _on_success(self, payload):
        self.last_status = payload
        self.sandbox.publish(LOADED, payload)

    def _on_failure(self, error):
        self.sandbox.log("WARN", f"Status fetch from {self.url} failed: {error}")
        self.sandbox.publish(FAILED, {"url": self.url, "error": str(error)})

    def _on_refresh(self, data):
        self.refresh()

    def _on_notes_renamed(self, data):
        if isinstance(data, dict):
            self.notes_title = data.get("title")
