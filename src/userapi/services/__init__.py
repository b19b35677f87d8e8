"""Service access and dependency injection."""

from fastapi import Request

from userapi.services.user_service import InMemoryUserService, UserService, paginate
from userapi.services.validation import validate_user


def get_user_service(request: Request) -> UserService:
    """Get the user service attached to the running application.

    Args:
        request: Incoming request

    Returns:
        UserService instance created by the application factory
    """
    return request.app.state.user_service


__all__ = ["InMemoryUserService", "UserService", "get_user_service", "paginate", "validate_user"]
