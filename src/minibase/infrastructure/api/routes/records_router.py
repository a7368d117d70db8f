"""Collection records API routes."""

from fastapi import APIRouter, status

from minibase.infrastructure.api.dependencies import CollectionStore, RowId
from minibase.infrastructure.api.schemas import EntryRequest, EntryResponse

router = APIRouter()


@router.get(
    "/{collection}/records",
    status_code=status.HTTP_200_OK,
    response_model=list[EntryResponse],
    responses={404: {"description": "Collection not found"}},
)
async def list_collection_records(
    collection: str, store: CollectionStore
) -> list[EntryResponse]:
    """List every record of a collection.

    A collection without records yet returns an empty list.
    """
    entries = await store.list_collection_records(collection)
    return [EntryResponse.from_entity(e) for e in entries]


@router.post(
    "/{collection}/records",
    status_code=status.HTTP_201_CREATED,
    response_model=EntryResponse,
    responses={404: {"description": "Collection not found"}},
)
async def create_collection_record(
    collection: str,
    request: EntryRequest,
    store: CollectionStore,
) -> EntryResponse:
    """Add a record to a collection."""
    entry = await store.create_collection_record(collection, request.entry)
    return EntryResponse.from_entity(entry)


@router.get(
    "/{collection}/records/{record_id}",
    status_code=status.HTTP_200_OK,
    response_model=EntryResponse,
    responses={404: {"description": "Collection or record not found"}},
)
async def view_collection_record(
    collection: str, record_id: RowId, store: CollectionStore
) -> EntryResponse:
    """Get one record."""
    return EntryResponse.from_entity(
        await store.view_collection_record(collection, record_id)
    )


@router.patch(
    "/{collection}/records/{record_id}",
    status_code=status.HTTP_200_OK,
    response_model=EntryResponse,
    responses={404: {"description": "Collection or record not found"}},
)
async def update_collection_record(
    collection: str,
    record_id: RowId,
    request: EntryRequest,
    store: CollectionStore,
) -> EntryResponse:
    """Replace a record's entry."""
    entry = await store.update_collection_record(collection, record_id, request.entry)
    return EntryResponse.from_entity(entry)


@router.delete(
    "/{collection}/records/{record_id}",
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Collection or record not found"}},
)
async def delete_collection_record(
    collection: str, record_id: RowId, store: CollectionStore
) -> None:
    """Delete one record."""
    await store.delete_collection_record(collection, record_id)
