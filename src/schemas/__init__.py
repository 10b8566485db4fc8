"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import SessionListResponse, AdminSessionResponse
"""

from src.schemas.session_schemas import (
    AdminRevokeSessionRequest,
    AdminSessionListResponse,
    AdminSessionResponse,
    FlaggedSessionResponse,
    HistoryAnalysisResponse,
    RevokeAllSessionsResponse,
    SessionListResponse,
    SessionSummaryResponse,
)

__all__ = [
    # Self-service
    "SessionListResponse",
    "SessionSummaryResponse",
    # Oversight
    "AdminRevokeSessionRequest",
    "AdminSessionListResponse",
    "AdminSessionResponse",
    "FlaggedSessionResponse",
    "HistoryAnalysisResponse",
    "RevokeAllSessionsResponse",
]
