"""User store: create, fetch and list users in the fixed ``users`` table."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from minibase.core.logging import get_logger
from minibase.domain.entities import User
from minibase.domain.exceptions import InternalError, NotFoundError, ValidationError
from minibase.infrastructure.persistence.models import UserModel
from minibase.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = UserRepository(session)

    async def create_user(self, name: str) -> User:
        """Create a user.

        Raises:
            ValidationError: If the name is blank.
        """
        if not name or not name.strip():
            raise ValidationError("User name is required")

        try:
            model = await self.repository.create(UserModel(name=name))
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create user", error=str(e))
            raise InternalError(f"Storage error: {e}") from e

        logger.info("User created", user_id=model.id)
        return User(id=model.id, name=model.name)

    async def get_user(self, user_id: int) -> User:
        """Get a user by id.

        Raises:
            NotFoundError: If no user has this id.
        """
        try:
            model = await self.repository.get_by_id(user_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError(f"Storage error: {e}") from e

        if model is None:
            raise NotFoundError(f"User {user_id} not found")
        return User(id=model.id, name=model.name)

    async def list_users(self) -> list[User]:
        """List all users in id order."""
        try:
            models = await self.repository.list_all()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError(f"Storage error: {e}") from e

        return [User(id=model.id, name=model.name) for model in models]
