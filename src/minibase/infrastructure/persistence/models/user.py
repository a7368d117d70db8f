"""SQLAlchemy model for the users table."""

from sqlalchemy import Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from minibase.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the ``users`` table.

    ``data`` is an unused blob column kept for compatibility with existing
    databases; it is never read or written by the API.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
