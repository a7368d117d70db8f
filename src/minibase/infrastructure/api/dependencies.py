"""FastAPI dependencies wiring request sessions to the stores."""

from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.domain.services.collection_service import CollectionService
from minibase.domain.services.identifier_sanitizer import IdentifierSanitizer
from minibase.domain.services.user_service import UserService
from minibase.infrastructure.persistence.database import get_db_session


def get_collection_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CollectionService:
    """Build a collection store bound to the request's session."""
    settings = request.app.state.settings
    sanitizer = IdentifierSanitizer(max_length=settings.collection_name_max_length)
    return CollectionService(session, sanitizer=sanitizer)


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserService:
    """Build a user store bound to the request's session."""
    return UserService(session)


# Largest value SQLite stores in an INTEGER column
MAX_ROW_ID = 2**63 - 1

RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]

CollectionStore = Annotated[CollectionService, Depends(get_collection_service)]
UserStore = Annotated[UserService, Depends(get_user_service)]
