"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from userapi.config import Settings, get_settings
from userapi.errors import request_validation_exception_handler
from userapi.middleware import setup_middleware
from userapi.routes import api_router
from userapi.services import InMemoryUserService, UserService

# Initialize settings
settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, user_service: UserService | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings, loaded from the environment if omitted
        user_service: User store, a freshly seeded in-memory store if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        logger.info("%s v%s started", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)
        logger.info("Log level: %s", settings.log_level)

        yield

        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="In-memory user management service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.user_service = user_service if user_service is not None else InMemoryUserService()

    setup_middleware(app, settings)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    app.include_router(api_router)

    return app


# Create FastAPI application
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "userapi.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
