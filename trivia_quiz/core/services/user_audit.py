"""Audit trail of users who logged in through an OAuth provider."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, Sequence

from trivia_quiz.core.models import AuthenticatedUser

logger = logging.getLogger(__name__)

RowAppender = Callable[[Sequence[object]], None]


class UserAuditLog:
    """Appends one row per login to the user-data sheet, or logs it when that is unavailable."""

    def __init__(
        self,
        append_row: RowAppender | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._append_row = append_row
        self._clock = clock

    def build_row(self, user: AuthenticatedUser) -> list[str]:
        return [
            self._clock().isoformat(),
            user.email or "",
            user.name or "",
            user.provider or "",
            user.id or "",
        ]

    def record_login(self, user: AuthenticatedUser) -> bool:
        """Record the login; returns True when the row reached the sheet."""
        row = self.build_row(user)
        if self._append_row is None:
            logger.info("User login (sheet not configured): %s", row)
            return False
        try:
            self._append_row(row)
        except Exception as exc:  # the login itself must not fail on audit errors
            logger.error("Error saving OAuth user data: %s", exc)
            logger.info("User login (for manual processing): %s", row)
            return False
        logger.info("OAuth user data saved: %s (%s)", user.email, user.provider)
        return True
