"""Repositories for database access."""

from minibase.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from minibase.infrastructure.persistence.repositories.record_repository import (
    RecordRepository,
)
from minibase.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["CollectionRepository", "RecordRepository", "UserRepository"]
