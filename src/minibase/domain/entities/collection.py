"""Collection and entry entities.

A collection is a client-declared document table. Its records live in a
separate physical table whose name is fixed when the collection is declared.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Collection:
    """A declared collection.

    Attributes:
        id: Identifier assigned by the store.
        name: Unique, client-chosen collection name.
        schema: Opaque JSON value, stored verbatim and never enforced.
        table_name: Physical table holding the collection's records.
    """

    id: int
    name: str
    schema: Any
    table_name: str

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "schema": self.schema}


@dataclass
class CollectionEntry:
    """One JSON document inside a collection's physical table."""

    id: int
    entry: Any

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "entry": self.entry}
