"""Collection store.

Manages collection metadata and the records of each collection. A
collection's physical table is not created when the collection is declared;
it is materialized by the first record insert, inside the same transaction
as that insert.

Every operation is one unit of work on the session it was given: it either
commits or rolls back before returning, so no transaction outlives a call.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.core.logging import get_logger
from minibase.domain.entities import Collection, CollectionEntry
from minibase.domain.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    StoreError,
)
from minibase.domain.services import entry_codec
from minibase.domain.services.identifier_sanitizer import (
    IdentifierSanitizer,
    SafeIdentifier,
    default_sanitizer,
)
from minibase.infrastructure.persistence.models import CollectionModel
from minibase.infrastructure.persistence.repositories import (
    CollectionRepository,
    RecordRepository,
)
from minibase.infrastructure.persistence.table_builder import TableBuilder

logger = get_logger(__name__)

# Marks an update_collection argument that was not supplied
KEEP = object()


class CollectionService:
    """Service for collection and record operations."""

    def __init__(
        self,
        session: AsyncSession,
        sanitizer: IdentifierSanitizer | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
            sanitizer: Collection name sanitizer. Defaults to a 64 character limit.
        """
        self.session = session
        self.sanitizer = sanitizer or default_sanitizer
        self.repository = CollectionRepository(session)

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        """Commit on success, roll back and classify errors otherwise."""
        try:
            yield
            await self.session.commit()
        except StoreError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Collection constraint violated", error=str(e.orig))
            raise ConflictError("Collection name is already taken") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Storage engine error", error=str(e), exc_type=type(e).__name__)
            raise InternalError(f"Storage error: {e}") from e

    @staticmethod
    def _to_collection(model: CollectionModel) -> Collection:
        return Collection(
            id=model.id,
            name=model.name,
            schema=entry_codec.decode(model.schema),
            table_name=model.table_name,
        )

    async def _get_model(self, identifier: SafeIdentifier) -> CollectionModel:
        model = await self.repository.get_by_name(identifier.value)
        if model is None:
            logger.debug("Collection not found", collection_name=identifier.value)
            raise NotFoundError(f"Collection '{identifier.value}' not found")
        return model

    async def _records(self, identifier: SafeIdentifier) -> tuple[RecordRepository, bool]:
        """Resolve a collection to its record repository.

        Returns:
            The repository and whether the physical table exists yet.
        """
        model = await self._get_model(identifier)
        records = RecordRepository(self.session, model.table_name)
        exists = await TableBuilder.table_exists(self.session, model.table_name)
        return records, exists

    @staticmethod
    def _record_not_found(identifier: SafeIdentifier, record_id: int) -> NotFoundError:
        return NotFoundError(
            f"Record {record_id} not found in collection '{identifier.value}'"
        )

    # collections

    async def list_collections(self) -> list[Collection]:
        """List all declared collections in storage order."""
        async with self._unit_of_work():
            models = await self.repository.list_all()
            return [self._to_collection(model) for model in models]

    async def create_collection(self, name: str, schema: Any) -> Collection:
        """Declare a collection.

        The physical table name is fixed here, but the table itself is only
        created by the first record insert.

        Raises:
            InvalidIdentifierError: If the name fails sanitization.
            ConflictError: If the name, or the table derived from it, is taken.
        """
        identifier = self.sanitizer.sanitize(name)
        table_name = TableBuilder.generate_table_name(identifier)

        async with self._unit_of_work():
            if await self.repository.name_exists(identifier.value):
                raise ConflictError(f"Collection '{identifier.value}' already exists")

            # A renamed collection keeps its table, and table names ignore case
            if await self.repository.table_name_in_use(table_name):
                raise ConflictError(
                    f"Collection '{identifier.value}' conflicts with the storage "
                    "of an existing collection"
                )

            model = await self.repository.create(
                CollectionModel(
                    name=identifier.value,
                    schema=entry_codec.encode(schema),
                    table_name=table_name,
                )
            )
            collection = self._to_collection(model)

        logger.info(
            "Collection created",
            collection_id=collection.id,
            collection_name=collection.name,
            table_name=table_name,
        )
        return collection

    async def view_collection(self, name: str) -> Collection:
        """Get a collection by exact name."""
        identifier = self.sanitizer.sanitize(name)
        async with self._unit_of_work():
            model = await self._get_model(identifier)
            return self._to_collection(model)

    async def update_collection(
        self,
        name: str,
        new_name: str | None = None,
        new_schema: Any = KEEP,
    ) -> Collection:
        """Rename a collection and/or replace its schema.

        Renaming only changes metadata. The records stay in the table that
        was assigned when the collection was declared.

        Args:
            name: Current collection name.
            new_name: New name, or None to keep the current one.
            new_schema: New schema, or KEEP to keep the current one.

        Raises:
            NotFoundError: If no collection has the current name.
            ConflictError: If another collection already uses the new name.
        """
        identifier = self.sanitizer.sanitize(name)
        new_identifier = self.sanitizer.sanitize(new_name) if new_name is not None else None

        async with self._unit_of_work():
            model = await self._get_model(identifier)

            if new_identifier is not None and new_identifier.value != model.name:
                if await self.repository.name_exists(new_identifier.value):
                    raise ConflictError(
                        f"Collection '{new_identifier.value}' already exists"
                    )
                model.name = new_identifier.value

            if new_schema is not KEEP:
                model.schema = entry_codec.encode(new_schema)

            await self.session.flush()
            collection = self._to_collection(model)

        logger.info(
            "Collection updated",
            collection_id=collection.id,
            previous_name=identifier.value,
            collection_name=collection.name,
        )
        return collection

    async def delete_collection(self, name: str) -> None:
        """Delete a collection's metadata and drop its records table."""
        identifier = self.sanitizer.sanitize(name)

        async with self._unit_of_work():
            model = await self._get_model(identifier)
            table_name = model.table_name
            collection_id = model.id
            await self.repository.delete(model)
            await TableBuilder.drop_table(self.session, table_name)

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            collection_name=identifier.value,
            table_name=table_name,
        )

    # records

    async def list_collection_records(self, name: str) -> list[CollectionEntry]:
        """List every record of a collection in id order.

        A declared collection that never received a record has no table yet
        and lists as empty.
        """
        identifier = self.sanitizer.sanitize(name)
        async with self._unit_of_work():
            records, exists = await self._records(identifier)
            if not exists:
                return []
            rows = await records.find_all()
            return [
                CollectionEntry(id=record_id, entry=entry_codec.decode(stored))
                for record_id, stored in rows
            ]

    async def create_collection_record(self, name: str, entry: Any) -> CollectionEntry:
        """Insert a record, creating the collection's table if needed."""
        identifier = self.sanitizer.sanitize(name)
        stored = entry_codec.encode(entry)

        async with self._unit_of_work():
            model = await self._get_model(identifier)
            await TableBuilder.create_table_if_missing(self.session, model.table_name)
            record_id = await RecordRepository(self.session, model.table_name).insert(stored)

        logger.info(
            "Record created",
            collection_name=identifier.value,
            record_id=record_id,
        )
        return CollectionEntry(id=record_id, entry=entry)

    async def view_collection_record(self, name: str, record_id: int) -> CollectionEntry:
        """Get one record by id."""
        identifier = self.sanitizer.sanitize(name)
        async with self._unit_of_work():
            records, exists = await self._records(identifier)
            row = await records.get_by_id(record_id) if exists else None
            if row is None:
                raise self._record_not_found(identifier, record_id)
            return CollectionEntry(id=row[0], entry=entry_codec.decode(row[1]))

    async def update_collection_record(
        self, name: str, record_id: int, entry: Any
    ) -> CollectionEntry:
        """Overwrite a record's entry.

        Raises:
            NotFoundError: If the collection or the record does not exist.
        """
        identifier = self.sanitizer.sanitize(name)
        stored = entry_codec.encode(entry)

        async with self._unit_of_work():
            records, exists = await self._records(identifier)
            affected = await records.update_entry(record_id, stored) if exists else 0
            if affected == 0:
                raise self._record_not_found(identifier, record_id)

        logger.info(
            "Record updated",
            collection_name=identifier.value,
            record_id=record_id,
        )
        return CollectionEntry(id=record_id, entry=entry)

    async def delete_collection_record(self, name: str, record_id: int) -> None:
        """Delete a record by id.

        Raises:
            NotFoundError: If the collection or the record does not exist.
        """
        identifier = self.sanitizer.sanitize(name)

        async with self._unit_of_work():
            records, exists = await self._records(identifier)
            affected = await records.delete(record_id) if exists else 0
            if affected == 0:
                raise self._record_not_found(identifier, record_id)

        logger.info(
            "Record deleted",
            collection_name=identifier.value,
            record_id=record_id,
        )
