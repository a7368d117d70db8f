"""Pydantic schemas for user endpoints."""

from pydantic import BaseModel, Field


class UserCreateRequest(BaseModel):
    """Request body for creating a user."""

    name: str = Field(..., description="User name")


class UserResponse(BaseModel):
    """A user."""

    id: int
    name: str

    model_config = {"from_attributes": True}
