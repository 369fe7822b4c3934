"""Session state for the Hive API."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from pyhiveomnia.const import HEADER_ACCESS_TOKEN


_LOGGER = logging.getLogger(__name__)


class AuthenticationHandler:
    """Hold the session of the logged in user.

    One handler is owned by each HiveAPI and shared with everything that talks
    through it. There is at most one session at a time: registering a new
    session replaces the previous one.

    The session token is sent with every request in the ``X-Omnia-Access-Token``
    header. No header means logged out.

    Attributes:
        user: Session record returned by the login request (None if logged out).
        last_authenticated_at: Timestamp of the last successful login
            (None if logged out).
    """

    def __init__(self) -> None:
        """Initialize the handler in the logged out state."""
        self.user: dict[str, Any] | None = None
        self.last_authenticated_at: datetime | None = None

    @property
    def session_id(self) -> str | None:
        """Get the session token of the current user."""
        if self.user is None:
            return None
        return self.user.get("sessionId")

    @property
    def headers(self) -> dict[str, str]:
        """Get the headers that authenticate a request.

        Returns:
            The access token header, or an empty dict when logged out.
        """
        session_id = self.session_id
        if not session_id:
            return {}
        return {HEADER_ACCESS_TOKEN: session_id}

    def is_authenticated(self) -> bool:
        """Check if a session token is registered.

        Returns:
            True if requests will carry a session token, False otherwise.
        """
        return bool(self.session_id)

    def register_session(self, user: dict[str, Any]) -> None:
        """Store the session returned by a successful login.

        Args:
            user: Session record, must contain ``sessionId``.
        """
        self.user = user
        self.last_authenticated_at = datetime.now(UTC)
        _LOGGER.debug("Session registered for %s", user.get("username", "unknown user"))

    def clear_session(self) -> None:
        """Forget the current session.

        Safe to call when no session is registered.
        """
        self.user = None
        self.last_authenticated_at = None
        _LOGGER.debug("Session cleared")
