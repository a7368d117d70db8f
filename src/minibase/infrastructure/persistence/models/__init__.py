"""SQLAlchemy models for the fixed tables."""

from minibase.infrastructure.persistence.models.collection import CollectionModel
from minibase.infrastructure.persistence.models.user import UserModel

__all__ = ["CollectionModel", "UserModel"]
