"""Account directory: registered accounts and their credential digests."""

import logging

from ..exceptions import AccountExistsError, AccountNotFoundError, BadCredentialError
from ..logging_utils import access_context
from ..state import AccessState
from .types import Account
from .verifier import CredentialVerifier

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Registers accounts and answers existence and credential queries.

    Hashing and digest comparison are deliberately slow, so they run outside
    the state lock; only the dictionary reads and writes are locked.
    """

    def __init__(self, state: AccessState, verifier: CredentialVerifier):
        """Initialize the directory.

        Args:
            state: Shared service state
            verifier: Password hashing capability
        """
        self.state = state
        self.verifier = verifier

    def register(self, username: str, password: str) -> Account:
        """Create a new account.

        Does not touch session state.

        Returns:
            The stored account

        Raises:
            AccountExistsError: If the username is taken
        """
        digest = self.hash_credential(username, password)
        return self.insert(username, digest)

    def hash_credential(self, username: str, password: str) -> bytes:
        """Hash a password for a username that is not yet registered.

        Runs without the lock; callers must still go through insert().

        Raises:
            AccountExistsError: If the username is taken
        """
        if self.exists(username):
            raise AccountExistsError(username)
        return self.verifier.hash(password)

    def insert(self, username: str, digest: bytes) -> Account:
        """Store an account under the state lock.

        Callers holding the lock can combine this with other mutations
        in the same critical section.

        Raises:
            AccountExistsError: If another registration won while hashing
        """
        with self.state.lock:
            if username in self.state.accounts:
                raise AccountExistsError(username)
            account = Account(username=username, password_digest=digest)
            self.state.accounts[username] = account

        logger.info(f"Account registered: {username}", extra=access_context("register", username=username))
        return account

    def verify(self, username: str, password: str) -> None:
        """Check a username/password pair.

        Raises:
            AccountNotFoundError: If the username is not registered
            BadCredentialError: If the password does not match
        """
        with self.state.lock:
            account = self.state.accounts.get(username)
        if account is None:
            raise AccountNotFoundError(username)

        if not self.verifier.matches(password, account.password_digest):
            logger.warning(
                f"Credential check failed for {username}",
                extra=access_context("login_failed", username=username),
            )
            raise BadCredentialError(username)

    def exists(self, username: str) -> bool:
        with self.state.lock:
            return username in self.state.accounts

    def get(self, username: str) -> Account | None:
        with self.state.lock:
            return self.state.accounts.get(username)

    def usernames(self) -> list[str]:
        """All registered usernames, sorted."""
        with self.state.lock:
            return sorted(self.state.accounts)
