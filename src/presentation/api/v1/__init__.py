"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs.

Resources:
    /api/v1/sessions               - Own sessions (list, logout, revoke)

Admin Resources:
    /api/v1/admin/sessions         - Session oversight
    /api/v1/admin/users/{id}/...   - Per-user revoke and history analysis
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.api.v1.admin import admin_router
from src.presentation.api.v1.sessions import router as sessions_router

# Create combined v1 router
v1_router = APIRouter(prefix=settings.api_v1_prefix)

# Include all resource routers
v1_router.include_router(sessions_router)

# Include admin routers
v1_router.include_router(admin_router)

# Export individual routers for testing
__all__ = [
    "v1_router",
    "sessions_router",
    "admin_router",
]
