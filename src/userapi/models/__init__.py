"""Models package."""

from userapi.models.user import User, UserPayload

__all__ = ["User", "UserPayload"]
