"""Pydantic schemas for API requests and responses."""

from minibase.infrastructure.api.schemas.collection_schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)
from minibase.infrastructure.api.schemas.record_schemas import (
    EntryRequest,
    EntryResponse,
)
from minibase.infrastructure.api.schemas.users_schemas import (
    UserCreateRequest,
    UserResponse,
)

__all__ = [
    "CollectionResponse",
    "CreateCollectionRequest",
    "EntryRequest",
    "EntryResponse",
    "UpdateCollectionRequest",
    "UserCreateRequest",
    "UserResponse",
]
