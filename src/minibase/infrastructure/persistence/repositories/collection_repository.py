"""Repository for collection metadata.

Provides CRUD operations for the ``_collections`` table.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.infrastructure.persistence.models import CollectionModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def list_all(self) -> Sequence[CollectionModel]:
        """Get all collections in storage order."""
        result = await self.session.execute(
            select(CollectionModel).order_by(CollectionModel.id)
        )
        return result.scalars().all()

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Create a new collection.

        Args:
            collection: The collection model to create.

        Returns:
            The created collection model with its id assigned.
        """
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def get_by_name(self, name: str) -> CollectionModel | None:
        """Get a collection by name.

        Args:
            name: The collection name.

        Returns:
            The collection model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.name == name)
        )
        return result.scalars().first()

    async def name_exists(self, name: str) -> bool:
        """Check if a collection with the given name exists."""
        result = await self.session.execute(
            select(CollectionModel.id).where(CollectionModel.name == name).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def table_name_in_use(self, table_name: str) -> bool:
        """Check if any collection already owns the given physical table."""
        result = await self.session.execute(
            select(CollectionModel.id)
            .where(CollectionModel.table_name == table_name)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def delete(self, collection: CollectionModel) -> None:
        """Delete a collection's metadata row."""
        await self.session.delete(collection)
        await self.session.flush()
