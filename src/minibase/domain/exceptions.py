"""Error taxonomy for the collection and user stores.

Every store failure is raised as a subclass of StoreError. The HTTP layer
maps each subclass to a status code; nothing here knows about HTTP.
"""


class StoreError(Exception):
    """Base class for store errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    """A lookup by name or id matched zero rows."""


class ConflictError(StoreError):
    """A collection name (or its physical table) is already taken."""


class InvalidIdentifierError(StoreError):
    """A collection name cannot be used to build a table identifier."""

    def __init__(self, message: str, code: str = "name_invalid") -> None:
        super().__init__(message)
        self.code = code


# The sanitizer's own name for the error
IdentifierError = InvalidIdentifierError


class InternalError(StoreError):
    """The storage engine failed or stored data is unreadable."""


class CodecError(InternalError):
    """Stored entry text is not valid JSON."""


class ValidationError(StoreError):
    """A request value is well-formed JSON but not acceptable."""
