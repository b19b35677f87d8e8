"""Middleware setup for the FastAPI application.

Every request runs through the same ordered chain:

    HTTPS redirect -> error boundary -> authentication -> request logging -> route

Each stage receives ``call_next``, the rest of the chain, and either calls it
or returns a response of its own.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from userapi.config import Settings
from userapi.errors import internal_server_error, unauthorized

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
Dispatch = Callable[[Request, CallNext], Awaitable[Response]]


async def error_boundary(request: Request, call_next: CallNext) -> Response:
    """Turn any exception raised downstream into a 500 response."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return internal_server_error()


def make_authenticator(token: str) -> Dispatch:
    """Build the stage that rejects requests without the expected bearer token.

    Args:
        token: Accepted bearer token

    Returns:
        Dispatch function for the middleware chain
    """
    expected = f"Bearer {token}"

    async def authenticate(request: Request, call_next: CallNext) -> Response:
        if request.headers.get("Authorization") != expected:
            logger.warning("Rejected unauthenticated request: %s %s", request.method, request.url.path)
            return unauthorized()
        return await call_next(request)

    return authenticate


async def log_requests(request: Request, call_next: CallNext) -> Response:
    """Log method, path and final status of each request that completes."""
    method = request.method
    path = request.url.path

    response = await call_next(request)

    logger.info("[%s] %s %s => %s", datetime.now(UTC).isoformat(), method, path, response.status_code)
    return response


def build_chain(settings: Settings) -> list[Dispatch]:
    """Get the middleware chain, outermost stage first."""
    return [
        error_boundary,
        make_authenticator(settings.auth_token),
        log_requests,
    ]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup middleware for the FastAPI application.

    Starlette wraps the most recently added middleware around the others, so
    the chain is registered innermost first.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    chain = build_chain(settings)
    for dispatch in reversed(chain):
        app.add_middleware(BaseHTTPMiddleware, dispatch=dispatch)

    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)

    logger.info(
        "Middleware chain: %s (https_redirect=%s)",
        " -> ".join(getattr(stage, "__name__", repr(stage)) for stage in chain),
        settings.https_redirect,
    )
