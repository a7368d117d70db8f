"""Unit tests for TableBuilder."""
import pytest

from minibase.domain.services.identifier_sanitizer import sanitize
from minibase.infrastructure.persistence.table_builder import TABLE_PREFIX, TableBuilder


def test_generate_table_name():
    """Test generating a table name from a collection name."""
    assert TableBuilder.generate_table_name(sanitize("notes")) == "_collections_notes"
    assert TableBuilder.generate_table_name(sanitize("MyNotes")) == "_collections_mynotes"
    assert TableBuilder.generate_table_name(sanitize("notes")).startswith(TABLE_PREFIX)


def test_generate_table_name_requires_safe_identifier():
    """Raw strings are never turned into table names."""
    with pytest.raises(TypeError):
        TableBuilder.generate_table_name("notes")  # type: ignore[arg-type]


def test_quote_rejects_foreign_names():
    assert TableBuilder.quote("_collections_notes") == '"_collections_notes"'
    for name in ["users", '_collections_x"; DROP TABLE users; --', "_collections_", "_collections_Notes"]:
        with pytest.raises(ValueError):
            TableBuilder.quote(name)


def test_build_create_table_ddl():
    ddl = TableBuilder.build_create_table_ddl("_collections_notes")
    assert ddl.startswith('CREATE TABLE IF NOT EXISTS "_collections_notes"')
    assert '"id" INTEGER PRIMARY KEY AUTOINCREMENT' in ddl
    assert '"entry" TEXT NOT NULL' in ddl


@pytest.mark.asyncio
async def test_create_and_drop_table(db_session):
    assert await TableBuilder.table_exists(db_session, "_collections_notes") is False

    await TableBuilder.create_table_if_missing(db_session, "_collections_notes")
    # A second call is a no-op
    await TableBuilder.create_table_if_missing(db_session, "_collections_notes")
    await db_session.commit()
    assert await TableBuilder.table_exists(db_session, "_collections_notes") is True

    await TableBuilder.drop_table(db_session, "_collections_notes")
    await db_session.commit()
    assert await TableBuilder.table_exists(db_session, "_collections_notes") is False


@pytest.mark.asyncio
async def test_create_table_is_rolled_back(db_session):
    """DDL runs inside the session transaction."""
    await TableBuilder.create_table_if_missing(db_session, "_collections_temp")
    await db_session.rollback()
    assert await TableBuilder.table_exists(db_session, "_collections_temp") is False
