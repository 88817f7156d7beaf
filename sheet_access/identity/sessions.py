"""Session tracking: which accounts are currently logged in."""

import logging

from ..exceptions import AlreadyLoggedInError, NotLoggedInError
from ..logging_utils import access_context
from ..state import AccessState

logger = logging.getLogger(__name__)


class SessionTracker:
    """Tracks logged-in accounts.

    Login is strict: logging in an account that already holds a session
    is an error, not a no-op.
    """

    def __init__(self, state: AccessState):
        self.state = state

    def login(self, username: str) -> None:
        """Open a session for an already verified account.

        Raises:
            AlreadyLoggedInError: If the account already has a session
        """
        with self.state.lock:
            if username in self.state.logged_in:
                raise AlreadyLoggedInError(username)
            self.state.logged_in.add(username)
        logger.info(f"Session opened: {username}", extra=access_context("login", username=username))

    def logout(self, username: str) -> None:
        """Close an account's session.

        Raises:
            NotLoggedInError: If the account has no session
        """
        with self.state.lock:
            if username not in self.state.logged_in:
                raise NotLoggedInError(username)
            self.state.logged_in.discard(username)
        logger.info(f"Session closed: {username}", extra=access_context("logout", username=username))

    def is_logged_in(self, username: str) -> bool:
        with self.state.lock:
            return username in self.state.logged_in

    def active_sessions(self) -> list[str]:
        """Usernames with an open session, sorted."""
        with self.state.lock:
            return sorted(self.state.logged_in)
