"""API routes for Minibase."""

from minibase.infrastructure.api.routes.collections_router import router as collections_router
from minibase.infrastructure.api.routes.records_router import router as records_router
from minibase.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "collections_router",
    "records_router",
    "users_router",
]
