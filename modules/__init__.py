"""Page module implementations for Hummingbird.

Importing this package registers all built-in module types.
"""

from modules.notes_module import NotesModule
from modules.status_module import StatusModule

__all__ = ["NotesModule", "StatusModule"]
