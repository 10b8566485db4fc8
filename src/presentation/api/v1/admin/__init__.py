"""Admin API routers.

Operator-only endpoints. Every route requires the admin role.

Resources:
    /api/v1/admin/sessions                          - Session oversight
    /api/v1/admin/users/{user_id}/sessions          - Bulk revoke
    /api/v1/admin/users/{user_id}/session-analyses  - History correlation
"""

from fastapi import APIRouter

from src.presentation.api.v1.admin.sessions import router as admin_sessions_router

# Create combined admin router
admin_router = APIRouter(prefix="/admin")

# Include all admin routers
admin_router.include_router(admin_sessions_router)

# Export routers
__all__ = [
    "admin_router",
    "admin_sessions_router",
]
