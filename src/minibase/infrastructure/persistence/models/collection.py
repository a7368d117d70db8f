"""SQLAlchemy model for the collection metadata table.

One row per declared collection. Records live in a separate physical table
named by ``table_name``, which is fixed when the collection is declared.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from minibase.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the ``_collections`` table.

    Attributes:
        id: Auto-increment primary key.
        name: Collection name (unique).
        schema: JSON text, stored verbatim.
        table_name: Physical table holding the collection's records (unique).
    """

    __tablename__ = "_collections"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )
    schema: Mapped[str] = mapped_column(Text, nullable=False)
    table_name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name}, table={self.table_name})>"
