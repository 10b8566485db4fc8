"""Commands - Write operations that change state.

Commands represent intent to perform an action. They are immutable
dataclasses with imperative names (CreateSession, RevokeSession).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.session_commands import (
    AnalyzeSessionHistory,
    CreateSession,
    EndSession,
    MarkSessionSuspicious,
    RevokeAllUserSessions,
    RevokeSession,
    TouchSessionActivity,
)

__all__ = [
    "AnalyzeSessionHistory",
    "CreateSession",
    "EndSession",
    "MarkSessionSuspicious",
    "RevokeAllUserSessions",
    "RevokeSession",
    "TouchSessionActivity",
]
