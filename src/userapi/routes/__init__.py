"""Route initialization module."""

from fastapi import APIRouter

from userapi.routes.root import router as root_router
from userapi.routes.user import router as user_router

# Create main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(root_router)
api_router.include_router(user_router)


__all__ = ["api_router"]
