"""Collections API routes.

Declares, inspects, renames and deletes collections. Store errors are
turned into HTTP responses by the application's exception handlers.
"""

from fastapi import APIRouter, status

from minibase.domain.services.collection_service import KEEP
from minibase.infrastructure.api.dependencies import CollectionStore
from minibase.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    UpdateCollectionRequest,
)

router = APIRouter()


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[CollectionResponse],
)
async def list_collections(store: CollectionStore) -> list[CollectionResponse]:
    """List all declared collections."""
    collections = await store.list_collections()
    return [CollectionResponse.from_entity(c) for c in collections]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={
        400: {"description": "Invalid collection name"},
        409: {"description": "Collection already exists"},
    },
)
async def create_collection(
    request: CreateCollectionRequest,
    store: CollectionStore,
) -> CollectionResponse:
    """Declare a new collection.

    Its records table is created when the first record is inserted.
    """
    collection = await store.create_collection(request.name, request.schema_)
    return CollectionResponse.from_entity(collection)


@router.get(
    "/{collection}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={404: {"description": "Collection not found"}},
)
async def view_collection(collection: str, store: CollectionStore) -> CollectionResponse:
    """Get a collection by name."""
    return CollectionResponse.from_entity(await store.view_collection(collection))


@router.patch(
    "/{collection}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={
        404: {"description": "Collection not found"},
        409: {"description": "New name already taken"},
    },
)
async def update_collection(
    collection: str,
    request: UpdateCollectionRequest,
    store: CollectionStore,
) -> CollectionResponse:
    """Rename a collection and/or replace its schema."""
    updated = await store.update_collection(
        collection,
        new_name=request.name,
        new_schema=request.schema_ if request.has_schema else KEEP,
    )
    return CollectionResponse.from_entity(updated)


@router.delete(
    "/{collection}",
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Collection not found"}},
)
async def delete_collection(collection: str, store: CollectionStore) -> None:
    """Delete a collection together with all of its records."""
    await store.delete_collection(collection)
