"""User models for the User Management API."""

from typing import ClassVar

from pydantic import BaseModel, Field


class User(BaseModel):
    """User entity model."""

    id: int = Field(..., description="Unique identifier assigned by the store")
    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": 1,
                "name": "Alice",
                "email": "alice@example.com",
            }
        }


class UserPayload(BaseModel):
    """Request body for creating or replacing a user.

    Fields are optional here so that missing values reach the validator and
    come back as readable messages. An ``id`` in the body is ignored.
    """

    name: str | None = Field(None, description="Full name of the user")
    email: str | None = Field(None, description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "name": "Carl",
                "email": "carl@example.com",
            }
        }
