"""Touch session activity handler.

Called on every authenticated request. Only last_activity changes, so the
repository performs a single targeted update.
"""

from datetime import UTC, datetime

from src.application.commands.session_commands import TouchSessionActivity
from src.core.result import Result, Success
from src.domain.protocols.session_repository import SessionRepository


class TouchSessionActivityHandler:
    """Handler for activity updates."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, cmd: TouchSessionActivity) -> Result[bool, str]:
        """Handle touch activity command.

        Returns:
            Success(True) if a session was touched, Success(False) if the
            token is unknown.
        """
        updated = await self._session_repo.update_activity(
            cmd.session_token, datetime.now(UTC)
        )
        return Success(value=updated)
