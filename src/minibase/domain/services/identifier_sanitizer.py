"""Collection name sanitizer.

Collection names end up inside SQL text as part of a physical table
identifier, so they are checked against a fixed allow-list before any
statement is built. Only a SafeIdentifier produced here may be used to
derive a table name.
"""

import re
from dataclasses import dataclass

from minibase.domain.exceptions import InvalidIdentifierError

# Letters, digits and underscores; must not start with a digit
NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_MAX_NAME_LENGTH = 64


@dataclass(frozen=True)
class SafeIdentifier:
    """A collection name that passed sanitization."""

    value: str

    def __str__(self) -> str:
        return self.value


class IdentifierSanitizer:
    """Validates client-supplied collection names."""

    def __init__(self, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> None:
        self.max_length = max_length

    def sanitize(self, name: str) -> SafeIdentifier:
        """Validate a collection name.

        Args:
            name: The client-supplied collection name.

        Returns:
            The name wrapped as a SafeIdentifier.

        Raises:
            InvalidIdentifierError: If the name is empty, too long, starts with
                a digit or contains characters outside [A-Za-z0-9_].
        """
        if not isinstance(name, str) or not name:
            raise InvalidIdentifierError(
                "Collection name is required", code="name_required"
            )

        if len(name) > self.max_length:
            raise InvalidIdentifierError(
                f"Collection name must be at most {self.max_length} characters",
                code="name_too_long",
            )

        if name[0].isdigit():
            raise InvalidIdentifierError(
                f"Collection name '{name}' must not start with a digit",
                code="name_leading_digit",
            )

        # fullmatch rejects a trailing newline that "$" would let through
        if not NAME_PATTERN.fullmatch(name):
            raise InvalidIdentifierError(
                f"Collection name '{name}' may only contain letters, digits and underscores",
                code="name_invalid_format",
            )

        return SafeIdentifier(name)


default_sanitizer = IdentifierSanitizer()


def sanitize(name: str) -> SafeIdentifier:
    """Sanitize a name with the default length limit."""
    return default_sanitizer.sanitize(name)
