"""Pydantic schemas for collection endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from minibase.domain.entities import Collection


class CreateCollectionRequest(BaseModel):
    """Request body for declaring a collection.

    The name is checked by the collection store, not here, so that bad
    names are reported the same way on every endpoint.
    """

    name: str = Field(..., description="Collection name (letters, digits, underscores)")
    schema_: Any = Field(
        default_factory=dict,
        alias="schema",
        description="Opaque schema descriptor, stored verbatim",
    )

    model_config = {"populate_by_name": True}


class UpdateCollectionRequest(BaseModel):
    """Request body for renaming a collection or replacing its schema.

    Omitted fields keep their current value.
    """

    name: str | None = Field(default=None, description="New collection name")
    schema_: Any = Field(default=None, alias="schema", description="New schema")

    model_config = {"populate_by_name": True}

    @property
    def has_schema(self) -> bool:
        """Whether the client sent a schema (possibly null)."""
        return "schema_" in self.model_fields_set


class CollectionResponse(BaseModel):
    """A declared collection."""

    id: int = Field(..., description="Collection ID")
    name: str = Field(..., description="Collection name")
    schema_: Any = Field(
        default=None,
        alias="schema",
        description="Schema descriptor as stored",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_entity(cls, collection: Collection) -> "CollectionResponse":
        return cls(id=collection.id, name=collection.name, schema_=collection.schema)
