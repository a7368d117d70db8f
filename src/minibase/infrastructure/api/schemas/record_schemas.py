"""Pydantic schemas for record endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from minibase.domain.entities import CollectionEntry


class EntryRequest(BaseModel):
    """Request body for creating or replacing a record."""

    entry: Any = Field(..., description="Any JSON value")


class EntryResponse(BaseModel):
    """A record of a collection."""

    id: int = Field(..., description="Record ID, unique within its collection")
    entry: Any = Field(..., description="The stored JSON value")

    @classmethod
    def from_entity(cls, entry: CollectionEntry) -> "EntryResponse":
        return cls(id=entry.id, entry=entry.entry)
