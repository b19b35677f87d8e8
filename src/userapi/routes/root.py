"""Root route."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["root"])

WELCOME_MESSAGE = "Welcome to the User Management API!"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return WELCOME_MESSAGE
