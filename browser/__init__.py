"""Browser abstraction for Hummingbird.

BrowserLibrary wraps the page, the effect stream and HTTP; Widgets
stores reusable effect combinations on top of it.
"""

from browser.effects import Effect, EffectChannel
from browser.page import Element, Page
from browser.library import BrowserLibrary, Effects
from browser.widgets import Decorators, Widgets

__all__ = [
    "Effect",
    "EffectChannel",
    "Element",
    "Page",
    "BrowserLibrary",
    "Effects",
    "Decorators",
    "Widgets",
]
