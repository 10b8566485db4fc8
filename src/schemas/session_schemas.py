"""Session management request/response schemas.

Pydantic models for session API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Self-service responses are sanitized: they never expose the client IP or the
revocation reason. Operator responses carry the full session record.

RESTful Endpoints:
    GET    /api/v1/sessions                                - List own sessions
    DELETE /api/v1/sessions/current                        - Logout
    DELETE /api/v1/sessions/{id}                           - Revoke own session
    GET    /api/v1/admin/sessions                          - List all sessions
    GET    /api/v1/admin/sessions/suspicious               - List suspicious
    PUT    /api/v1/admin/sessions/{id}/mark-suspicious     - Flag a session
    DELETE /api/v1/admin/sessions/{id}                     - Revoke any session
    DELETE /api/v1/admin/users/{user_id}/sessions          - Revoke all for user
    POST   /api/v1/admin/users/{user_id}/session-analyses  - History sweep
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.queries.handlers.list_sessions_handler import SessionListItem
from src.domain.entities.session import Session
from src.domain.value_objects.suspicion_verdict import HistoryAnalysis


# =============================================================================
# Self-service
# =============================================================================


class SessionSummaryResponse(BaseModel):
    """Sanitized session shown to its owner."""

    id: UUID = Field(..., description="Session identifier")
    device_info: str | None = Field(None, description="Raw user agent string")
    location: str | None = Field(
        None,
        description="Geographic location (e.g., 'Lagos, Nigeria')",
    )
    is_mobile: bool = Field(default=False, description="Phone or tablet login")
    browser_name: str | None = Field(None, description="Browser family")
    os_name: str | None = Field(None, description="Operating system family")
    last_activity: datetime | None = Field(None, description="Last activity timestamp")
    created_at: datetime = Field(..., description="When session was created")
    is_current: bool = Field(
        default=False,
        description="Whether this is the session making the request",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0190f7a2-6c1e-7d3a-9b61-2f0c8e4d5a10",
                "device_info": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) ...",
                "location": "Lagos, Nigeria",
                "is_mobile": False,
                "browser_name": "Chrome",
                "os_name": "Mac OS X",
                "last_activity": "2024-01-15T14:45:00Z",
                "created_at": "2024-01-15T10:30:00Z",
                "is_current": True,
            }
        }
    )

    @classmethod
    def from_item(cls, item: SessionListItem) -> "SessionSummaryResponse":
        session = item.session
        return cls(
            id=session.id,
            device_info=session.device_info,
            location=session.location,
            is_mobile=session.is_mobile,
            browser_name=session.browser_name,
            os_name=session.os_name,
            last_activity=session.last_activity,
            created_at=session.created_at,
            is_current=item.is_current,
        )


class SessionListResponse(BaseModel):
    """Response for GET /sessions."""

    sessions: list[SessionSummaryResponse] = Field(
        default_factory=list,
        description="Active sessions, newest first",
    )
    total_count: int = Field(..., description="Number of sessions returned")


# =============================================================================
# Operator
# =============================================================================


class AdminSessionResponse(BaseModel):
    """Full session record shown to operators."""

    id: UUID = Field(..., description="Session identifier")
    user_id: UUID = Field(..., description="Owning user")
    device_info: str | None = Field(None, description="Raw user agent string")
    is_mobile: bool = Field(default=False)
    browser_name: str | None = Field(None)
    browser_version: str | None = Field(None)
    os_name: str | None = Field(None)
    os_version: str | None = Field(None)
    ip_address: str | None = Field(None, description="Client IP at login")
    location: str | None = Field(None, description="Geographic location label")
    status: str = Field(..., description="active, inactive, suspicious or revoked")
    last_activity: datetime | None = Field(None)
    created_at: datetime = Field(...)
    expires_at: datetime | None = Field(None)
    revocation_reason: str | None = Field(None)

    @classmethod
    def from_entity(cls, session: Session) -> "AdminSessionResponse":
        return cls(
            id=session.id,
            user_id=session.user_id,
            device_info=session.device_info,
            is_mobile=session.is_mobile,
            browser_name=session.browser_name,
            browser_version=session.browser_version,
            os_name=session.os_name,
            os_version=session.os_version,
            ip_address=session.ip_address,
            location=session.location,
            status=session.status.value,
            last_activity=session.last_activity,
            created_at=session.created_at,
            expires_at=session.expires_at,
            revocation_reason=session.revocation_reason,
        )


class AdminSessionListResponse(BaseModel):
    """Response for operator session listings."""

    sessions: list[AdminSessionResponse] = Field(default_factory=list)
    total_count: int = Field(
        ..., description="Sessions matching the filters, across all pages"
    )


class AdminRevokeSessionRequest(BaseModel):
    """Optional body for DELETE /admin/sessions/{id}."""

    reason: str | None = Field(
        None,
        max_length=255,
        description="Revocation reason (defaults to 'Revoked by admin')",
    )


class RevokeAllSessionsResponse(BaseModel):
    """Response for DELETE /admin/users/{user_id}/sessions."""

    user_id: UUID = Field(..., description="User whose sessions were revoked")
    revoked_count: int = Field(..., description="Number of sessions newly revoked")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "0190f7a2-6c1e-7d3a-9b61-2f0c8e4d5a10",
                "revoked_count": 3,
            }
        }
    )


class FlaggedSessionResponse(BaseModel):
    """A session newly flagged by a history sweep."""

    session_id: UUID
    reason: str


class HistoryAnalysisResponse(BaseModel):
    """Response for POST /admin/users/{user_id}/session-analyses."""

    user_id: UUID
    sessions_examined: int = Field(..., description="Sessions considered by the sweep")
    skipped: bool = Field(
        default=False,
        description="True when the user had too few sessions to analyse",
    )
    flagged_sessions: list[FlaggedSessionResponse] = Field(default_factory=list)

    @classmethod
    def from_analysis(cls, analysis: HistoryAnalysis) -> "HistoryAnalysisResponse":
        return cls(
            user_id=analysis.user_id,
            sessions_examined=analysis.sessions_examined,
            skipped=analysis.skipped,
            flagged_sessions=[
                FlaggedSessionResponse(session_id=session_id, reason=reason)
                for session_id, reason in analysis.flagged.items()
            ],
        )
