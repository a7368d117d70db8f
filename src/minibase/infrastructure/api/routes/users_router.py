"""Users API routes."""

from fastapi import APIRouter, status

from minibase.infrastructure.api.dependencies import RowId, UserStore
from minibase.infrastructure.api.schemas import UserCreateRequest, UserResponse

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(request: UserCreateRequest, store: UserStore) -> UserResponse:
    """Create a user."""
    user = await store.create_user(request.name)
    return UserResponse(id=user.id, name=user.name)


@router.get("", status_code=status.HTTP_200_OK, response_model=list[UserResponse])
async def list_users(store: UserStore) -> list[UserResponse]:
    """List all users."""
    return [UserResponse(id=u.id, name=u.name) for u in await store.list_users()]


@router.get(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: RowId, store: UserStore) -> UserResponse:
    """Get a user by id."""
    user = await store.get_user(user_id)
    return UserResponse(id=user.id, name=user.name)
