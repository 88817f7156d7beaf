"""Tests for the identity module: verifier, account directory, sessions."""

from __future__ import annotations

import pytest

from sheet_access import (
    AccessState,
    AccountDirectory,
    AccountExistsError,
    AccountNotFoundError,
    AlreadyLoggedInError,
    BadCredentialError,
    BcryptVerifier,
    NotLoggedInError,
    SessionTracker,
    ValidationError,
)


class TestBcryptVerifier:
    """Tests for BcryptVerifier."""

    def test_hash_is_salted(self, verifier: BcryptVerifier) -> None:
        """Same password hashes to different digests."""
        first = verifier.hash("secret")
        second = verifier.hash("secret")

        assert first != second
        assert verifier.matches("secret", first)
        assert verifier.matches("secret", second)

    def test_digest_is_not_plaintext(self, verifier: BcryptVerifier) -> None:
        digest = verifier.hash("secret")
        assert b"secret" not in digest
        assert digest.startswith(b"$2")

    def test_wrong_password(self, verifier: BcryptVerifier) -> None:
        digest = verifier.hash("secret")
        assert not verifier.matches("Secret", digest)

    def test_rejects_overlong_password(self, verifier: BcryptVerifier) -> None:
        with pytest.raises(ValidationError) as exc_info:
            verifier.hash("x" * 73)
        assert exc_info.value.field == "password"

    def test_overlong_password_never_matches(self, verifier: BcryptVerifier) -> None:
        digest = verifier.hash("x" * 72)
        assert not verifier.matches("x" * 73, digest)


class TestAccountDirectory:
    """Tests for AccountDirectory."""

    @pytest.fixture
    def directory(self, state: AccessState, verifier: BcryptVerifier) -> AccountDirectory:
        return AccountDirectory(state, verifier)

    def test_register_stores_digest(self, directory: AccountDirectory) -> None:
        account = directory.register("alice", "pw1")

        assert account.username == "alice"
        assert account.password_digest != b"pw1"
        assert directory.exists("alice")
        assert directory.get("alice") == account

    def test_register_does_not_log_in(
        self, directory: AccountDirectory, state: AccessState
    ) -> None:
        directory.register("alice", "pw1")
        assert "alice" not in state.logged_in

    def test_insert_after_hash_loses_race(self, directory: AccountDirectory) -> None:
        """A digest hashed before a competing registration cannot overwrite it."""
        digest = directory.hash_credential("alice", "pw1")
        directory.register("alice", "pw2")

        with pytest.raises(AccountExistsError):
            directory.insert("alice", digest)

        directory.verify("alice", "pw2")

    def test_hash_credential_rejects_taken_name(self, directory: AccountDirectory) -> None:
        directory.register("alice", "pw1")
        with pytest.raises(AccountExistsError):
            directory.hash_credential("alice", "pw1")

    def test_register_duplicate(self, directory: AccountDirectory) -> None:
        directory.register("alice", "pw1")

        with pytest.raises(AccountExistsError) as exc_info:
            directory.register("alice", "other")

        assert exc_info.value.username == "alice"
        assert exc_info.value.details == {"username": "alice"}

    def test_usernames_are_case_sensitive(self, directory: AccountDirectory) -> None:
        directory.register("alice", "pw1")
        directory.register("Alice", "pw2")

        assert directory.usernames() == ["Alice", "alice"]

    def test_verify_success(self, directory: AccountDirectory) -> None:
        directory.register("alice", "pw1")
        directory.verify("alice", "pw1")

    def test_verify_unknown_user(self, directory: AccountDirectory) -> None:
        with pytest.raises(AccountNotFoundError) as exc_info:
            directory.verify("dave", "x")
        assert exc_info.value.username == "dave"

    def test_verify_bad_password(self, directory: AccountDirectory) -> None:
        directory.register("alice", "pw1")
        with pytest.raises(BadCredentialError):
            directory.verify("alice", "wrong")

    def test_exists_unknown(self, directory: AccountDirectory) -> None:
        assert not directory.exists("nobody")
        assert directory.get("nobody") is None

    def test_account_to_dict_excludes_digest(self, directory: AccountDirectory) -> None:
        data = directory.register("alice", "pw1").to_dict()

        assert data["username"] == "alice"
        assert "password_digest" not in data
        assert "created_at" in data


class TestSessionTracker:
    """Tests for SessionTracker."""

    @pytest.fixture
    def sessions(self, state: AccessState) -> SessionTracker:
        return SessionTracker(state)

    def test_login_logout(self, sessions: SessionTracker) -> None:
        assert not sessions.is_logged_in("alice")

        sessions.login("alice")
        assert sessions.is_logged_in("alice")

        sessions.logout("alice")
        assert not sessions.is_logged_in("alice")

    def test_relogin_is_an_error(self, sessions: SessionTracker) -> None:
        sessions.login("alice")
        with pytest.raises(AlreadyLoggedInError):
            sessions.login("alice")
        assert sessions.is_logged_in("alice")

    def test_logout_without_session(self, sessions: SessionTracker) -> None:
        with pytest.raises(NotLoggedInError):
            sessions.logout("alice")

    def test_logout_twice(self, sessions: SessionTracker) -> None:
        sessions.login("alice")
        sessions.logout("alice")
        with pytest.raises(NotLoggedInError):
            sessions.logout("alice")

    def test_active_sessions_sorted(self, sessions: SessionTracker) -> None:
        sessions.login("carol")
        sessions.login("alice")
        assert sessions.active_sessions() == ["alice", "carol"]
