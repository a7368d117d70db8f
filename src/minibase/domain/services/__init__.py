"""Domain services for Minibase.

The collection and user stores live in ``collection_service`` and
``user_service``; they depend on the persistence layer and are imported from
their modules directly.
"""

from minibase.domain.services.identifier_sanitizer import (
    IdentifierSanitizer,
    SafeIdentifier,
    sanitize,
)

__all__ = ["IdentifierSanitizer", "SafeIdentifier", "sanitize"]
