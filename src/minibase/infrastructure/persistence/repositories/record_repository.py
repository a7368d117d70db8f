"""Repository for collection records.

Collection tables are created at runtime and are not mapped to ORM models,
so every statement here is raw SQL against a generated table name. Values
are always passed as bound parameters.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.core.logging import get_logger
from minibase.infrastructure.persistence.table_builder import TableBuilder

logger = get_logger(__name__)


class RecordRepository:
    """Repository for rows of one collection table.

    Entries are read and written as stored text; encoding is the caller's
    concern.
    """

    def __init__(self, session: AsyncSession, table_name: str) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
            table_name: Generated physical table name.
        """
        self.session = session
        self.table_name = table_name
        self._table = TableBuilder.quote(table_name)

    async def find_all(self) -> list[tuple[int, Any]]:
        """Get all rows as (id, stored entry) pairs, in id order."""
        result = await self.session.execute(
            text(f'SELECT "id", "entry" FROM {self._table} ORDER BY "id"')
        )
        return [(row.id, row.entry) for row in result.fetchall()]

    async def get_by_id(self, record_id: int) -> tuple[int, Any] | None:
        """Get one row by id, or None if absent."""
        result = await self.session.execute(
            text(f'SELECT "id", "entry" FROM {self._table} WHERE "id" = :record_id'),
            {"record_id": record_id},
        )
        row = result.fetchone()
        if row is None:
            return None
        return row.id, row.entry

    async def insert(self, stored_entry: str) -> int:
        """Insert a row and return its assigned id."""
        result = await self.session.execute(
            text(f'INSERT INTO {self._table} ("entry") VALUES (:entry)'),
            {"entry": stored_entry},
        )
        record_id = result.lastrowid
        logger.debug("Record inserted", table_name=self.table_name, record_id=record_id)
        return record_id

    async def update_entry(self, record_id: int, stored_entry: str) -> int:
        """Overwrite a row's entry.

        Returns:
            Number of rows affected (0 or 1).
        """
        result = await self.session.execute(
            text(f'UPDATE {self._table} SET "entry" = :entry WHERE "id" = :record_id'),
            {"entry": stored_entry, "record_id": record_id},
        )
        return result.rowcount

    async def delete(self, record_id: int) -> int:
        """Delete a row by id.

        Returns:
            Number of rows affected (0 or 1).
        """
        result = await self.session.execute(
            text(f'DELETE FROM {self._table} WHERE "id" = :record_id'),
            {"record_id": record_id},
        )
        return result.rowcount
