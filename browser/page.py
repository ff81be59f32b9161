"""Page document for the browser library.

Holds the HTML served at "/" and an index of its elements by id, so
library.get_element_by_id() can answer without a real DOM.
"""

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Element:
    """An element on the page, as written in the HTML."""
    id: str
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)

    @property
    def classes(self):
        return self.attrs.get("class", "").split()


class _IdIndexer(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.elements: Dict[str, Element] = {}

    def handle_starttag(self, tag, attrs):
        attr_map = {k: (v or "") for k, v in attrs}
        element_id = attr_map.get("id")
        if not element_id:
            return
        if element_id in self.elements:
            # first one wins, like document.getElementById
            logger.warning("Duplicate element id on page: %s", element_id)
            return
        self.elements[element_id] = Element(element_id, tag, attr_map)

    handle_startendtag = handle_starttag


class Page:
    """HTML for one page plus its id index."""

    def __init__(self, html: str = "", path: Optional[Path] = None):
        self.html = html
        self.path = path
        indexer = _IdIndexer()
        indexer.feed(html)
        indexer.close()
        self._elements = indexer.elements

    @classmethod
    def from_file(cls, path) -> "Page":
        path = Path(path)
        try:
            html = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Page file not found: %s", path)
            html = ""
        return cls(html, path)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self._elements.get(element_id)

    def __contains__(self, element_id):
        return element_id in self._elements

    def __len__(self):
        return len(self._elements)
