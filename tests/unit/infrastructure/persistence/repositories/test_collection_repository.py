"""Unit tests for CollectionRepository."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.infrastructure.persistence.models import CollectionModel
from minibase.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    session = AsyncMock(spec=AsyncSession)
    # add() is synchronous on a real session
    session.add = MagicMock()
    return session


@pytest.fixture
def repository(mock_session):
    """Create a CollectionRepository instance with a mock session."""
    return CollectionRepository(mock_session)


@pytest.mark.asyncio
async def test_create_collection(repository, mock_session):
    """Test creating a new collection."""
    collection = CollectionModel(
        name="notes",
        schema="{}",
        table_name="_collections_notes",
    )

    result = await repository.create(collection)

    mock_session.add.assert_called_once_with(collection)
    mock_session.flush.assert_called_once()
    assert result == collection


@pytest.mark.asyncio
async def test_get_by_name(repository, mock_session):
    """Test getting a collection by name."""
    expected = CollectionModel(id=1, name="notes", schema="{}", table_name="_collections_notes")

    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = expected
    mock_session.execute.return_value = mock_result

    result = await repository.get_by_name("notes")

    mock_session.execute.assert_called_once()
    assert result == expected


@pytest.mark.asyncio
async def test_get_by_name_not_found(repository, mock_session):
    """Test getting a non-existent collection by name."""
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = None
    mock_session.execute.return_value = mock_result

    assert await repository.get_by_name("missing") is None


@pytest.mark.asyncio
async def test_name_exists(repository, mock_session):
    """Test checking if a name exists."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = 3
    mock_session.execute.return_value = mock_result

    assert await repository.name_exists("notes") is True

    mock_result.scalar_one_or_none.return_value = None
    assert await repository.name_exists("other") is False


@pytest.mark.asyncio
async def test_table_name_in_use(repository, mock_session):
    """Test checking if a physical table is already assigned."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    assert await repository.table_name_in_use("_collections_notes") is False


@pytest.mark.asyncio
async def test_delete(repository, mock_session):
    """Test deleting a collection row."""
    collection = CollectionModel(id=1, name="notes", schema="{}", table_name="_collections_notes")

    await repository.delete(collection)

    mock_session.delete.assert_called_once_with(collection)
    mock_session.flush.assert_called_once()
