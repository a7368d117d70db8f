"""Domain entities for Minibase."""

from minibase.domain.entities.collection import Collection, CollectionEntry
from minibase.domain.entities.user import User

__all__ = ["Collection", "CollectionEntry", "User"]
