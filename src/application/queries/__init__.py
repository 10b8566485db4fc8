"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetSession, ListActiveSessions).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.session_queries import (
    GetSession,
    GetSessionByToken,
    ListActiveSessions,
    ListAllSessions,
    ListSuspiciousSessions,
)

__all__ = [
    "GetSession",
    "GetSessionByToken",
    "ListActiveSessions",
    "ListAllSessions",
    "ListSuspiciousSessions",
]
