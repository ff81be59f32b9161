"""Notes module -- a draggable panel with an editable title and body.

Renaming the title publishes "notes.renamed" so other modules (the
status module, for one) can react without knowing this one exists.

Config example (in dashboard.yaml):
    modules:
      - name: "notes"
        type: "notes"
        panel: "#notes"
        title: "#notes-title"
        body: "#notes-body"
"""

from typing import Dict, Optional

from core.base_module import PageModule
from core.registry import register_module

RENAMED = "notes.renamed"
CLEAR = "notes.clear"


@register_module("notes")
class NotesModule(PageModule):
    """Editable notes panel."""

    def __init__(self, sandbox, config: Optional[Dict] = None):
        super().__init__(sandbox, config)
        self.panel = self.module_config.get("panel", "#notes")
        self.title_selector = self.module_config.get("title", self.panel + "-title")
        self.body_selector = self.module_config.get("body", self.panel + "-body")
        self.title: Optional[str] = None

    def init(self):
        self.sandbox.widgets.simple_widget(self.panel)
        self.sandbox.widgets.editable_title(self.title_selector, self._on_rename)
        self.sandbox.widgets.simple_editable(self.body_selector)
        self.sandbox.register(CLEAR, self._on_clear)

    def render(self):
        element = self.sandbox.get_element_by_id(self.panel.lstrip("#"))
        if element is None:
            self.sandbox.log("WARN", f"Notes panel {self.panel} is not on the page")
            return
        self.sandbox.log("DEBUG", f"Notes panel {self.panel} ready")

    def destroy(self):
        self.sandbox.detach(CLEAR, self._on_clear)

    def _on_rename(self, value: str):
        self.title = value
        self.sandbox.publish(RENAMED, {"panel": self.panel, "title": value})

    def _on_clear(self, data):
        self.title = None
        self.sandbox.log("INFO", f"Notes panel {self.panel} cleared")
