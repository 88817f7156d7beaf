"""
Sheet access service facade.

Composes the account directory, session tracker and sharing policy engine
over one AccessState. This is the contract the transport layer calls.
"""

from __future__ import annotations

import logging

from .access.permissions import SharingSnapshot, ShareRole, SheetView
from .access.policy import SharingPolicyEngine
from .config import AccessConfig
from .identity.directory import AccountDirectory
from .identity.sessions import SessionTracker
from .identity.types import Account
from .identity.verifier import BcryptVerifier, CredentialVerifier
from .state import AccessState

logger = logging.getLogger(__name__)


class AccessService:
    """Authentication, sessions and sheet sharing behind one interface.

    Usage:
        >>> service = AccessService.from_config(AccessConfig())
        >>> service.register("alice", "pw1")
        >>> service.authenticate("alice", "pw1")
        >>> service.grant_role("alice", "bob", ShareRole.VIEWER)
    """

    def __init__(
        self,
        state: AccessState,
        verifier: CredentialVerifier,
        config: AccessConfig | None = None,
    ):
        """Initialize the service.

        Args:
            state: Shared state; owned by the caller
            verifier: Password hashing capability
            config: Service configuration (defaults if omitted)
        """
        self.state = state
        self.config = config or AccessConfig()
        self.directory = AccountDirectory(state, verifier)
        self.sessions = SessionTracker(state)
        self.policy = SharingPolicyEngine(state, self.directory, self.sessions)

    @classmethod
    def from_config(cls, config: AccessConfig) -> AccessService:
        """Build a service with fresh state and a bcrypt verifier."""
        return cls(AccessState(), BcryptVerifier(rounds=config.bcrypt_rounds), config)

    def register(self, username: str, password: str) -> Account:
        """Register an account, logging it in when register_auto_login is set.

        Raises:
            AccountExistsError: If the username is taken
        """
        if not self.config.register_auto_login:
            return self.directory.register(username, password)

        digest = self.directory.hash_credential(username, password)
        # Insert and login share one hold of the lock, so nobody observes
        # the new account logged out
        with self.state.lock:
            account = self.directory.insert(username, digest)
            self.sessions.login(username)
        return account

    def authenticate(self, username: str, password: str) -> None:
        """Verify credentials and open a session.

        Raises:
            AccountNotFoundError: If the username is not registered
            BadCredentialError: If the password does not match
            AlreadyLoggedInError: If the account already has a session
        """
        self.directory.verify(username, password)
        self.sessions.login(username)

    def end_session(self, username: str) -> None:
        """Close a session.

        Raises:
            NotLoggedInError: If the account has no session
        """
        self.sessions.logout(username)

    def grant_role(self, owner: str, target: str, role: ShareRole) -> None:
        self.policy.assign(owner, target, role)

    def revoke(self, owner: str, target: str) -> None:
        self.policy.revoke_access(owner, target)

    def list_sheets(self, username: str) -> list[SheetView]:
        return self.policy.list_accessible_sheets(username)

    def sharing_record(self, owner: str) -> SharingSnapshot | None:
        return self.policy.sharing_record(owner)

    def is_logged_in(self, username: str) -> bool:
        return self.sessions.is_logged_in(username)
