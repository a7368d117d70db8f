"""Physical table builder for collection records.

Every collection stores its records in its own table with a fixed layout:
an auto-increment ``id`` and a JSON text ``entry``. Table names are always
generated here from a SafeIdentifier, never from raw client input.
"""

import re

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.core.logging import get_logger
from minibase.domain.services.identifier_sanitizer import SafeIdentifier

logger = get_logger(__name__)

TABLE_PREFIX = "_collections_"
TABLE_NAME_PATTERN = re.compile(r"^_collections_[a-z_][a-z0-9_]*$")

# Columns of every collection table
RECORD_COLUMNS = [
    ("id", "INTEGER PRIMARY KEY AUTOINCREMENT"),
    ("entry", "TEXT NOT NULL"),
]


class TableBuilder:
    """Builds, creates and drops per-collection tables."""

    @classmethod
    def generate_table_name(cls, identifier: SafeIdentifier) -> str:
        """Generate the physical table name for a collection.

        SQLite compares identifiers case-insensitively, so the name is
        lowercased to keep one spelling per table.

        Args:
            identifier: A sanitized collection name.

        Returns:
            The table name, e.g. ``_collections_notes``.
        """
        if not isinstance(identifier, SafeIdentifier):
            raise TypeError("Table names can only be built from a SafeIdentifier")
        return f"{TABLE_PREFIX}{identifier.value.lower()}"

    @classmethod
    def quote(cls, table_name: str) -> str:
        """Quote a generated table name for use in SQL text.

        Raises:
            ValueError: If the name was not produced by generate_table_name.
        """
        if not TABLE_NAME_PATTERN.fullmatch(table_name):
            raise ValueError(f"Refusing to use table name {table_name!r}")
        return f'"{table_name}"'

    @classmethod
    def build_create_table_ddl(cls, table_name: str) -> str:
        """Build the CREATE TABLE IF NOT EXISTS statement for a table."""
        columns_sql = ",\n  ".join(f'"{col}" {col_type}' for col, col_type in RECORD_COLUMNS)
        return f"CREATE TABLE IF NOT EXISTS {cls.quote(table_name)} (\n  {columns_sql}\n)"

    @classmethod
    async def table_exists(cls, session: AsyncSession, table_name: str) -> bool:
        """Check if a table exists.

        Args:
            session: Session whose transaction the check runs in.
            table_name: The physical table name.
        """
        check_sql = """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name=:table_name
        """
        result = await session.execute(text(check_sql), {"table_name": table_name})
        return result.scalar_one_or_none() is not None

    @classmethod
    async def create_table_if_missing(cls, session: AsyncSession, table_name: str) -> None:
        """Create a collection table unless it already exists.

        Runs inside the session's transaction, so a rollback undoes it.
        """
        ddl = cls.build_create_table_ddl(table_name)
        await session.execute(text(ddl))
        logger.debug("Collection table ensured", table_name=table_name)

    @classmethod
    async def drop_table(cls, session: AsyncSession, table_name: str) -> None:
        """Drop a collection table if it exists."""
        await session.execute(text(f"DROP TABLE IF EXISTS {cls.quote(table_name)}"))
        logger.info("Collection table dropped", table_name=table_name)
