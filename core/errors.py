"""Error types raised by the Hummingbird core.

Registration-path mistakes (bad callbacks, duplicate names, unknown
modules) are raised to the caller. Failures inside module or subscriber
code never reach here -- they are logged where they happen.
"""

from typing import Any, Optional


class HummingbirdError(Exception):
    """Base class. Carries a message and the offending identifier."""

    def __init__(self, message: str, identifier: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def __str__(self):
        return self.message


class InvalidArgument(HummingbirdError, ValueError):
    """Bad event type, callback, module name or builder."""


class InvalidModule(InvalidArgument):
    """A builder or instance that doesn't provide init/render/destroy."""


class DuplicateSubscription(HummingbirdError):
    """The same callback is already registered for the event type."""


class UnknownEventType(HummingbirdError):
    """No listeners have ever been registered for the event type."""


class AlreadyRegistered(HummingbirdError):
    """A module with this name is already in the container."""


class NotFound(HummingbirdError, LookupError):
    """No module (or editable element) with this name."""


class NotStarted(HummingbirdError):
    """Lifecycle call on a module whose instance hasn't been built yet."""
