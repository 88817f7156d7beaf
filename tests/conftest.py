"""
Shared test configuration and fixtures.

Every test gets a fresh AccessState. The bcrypt verifier runs at the
minimum cost factor so hashing stays fast.
"""

from __future__ import annotations

import pytest

from sheet_access import AccessConfig, AccessService, AccessState, BcryptVerifier

TEST_ROUNDS = 4


@pytest.fixture
def verifier() -> BcryptVerifier:
    return BcryptVerifier(rounds=TEST_ROUNDS)


@pytest.fixture
def state() -> AccessState:
    return AccessState()


@pytest.fixture
def service(state: AccessState, verifier: BcryptVerifier) -> AccessService:
    return AccessService(state, verifier, AccessConfig(bcrypt_rounds=TEST_ROUNDS))


@pytest.fixture
def alice_bob_carol(service: AccessService) -> AccessService:
    """Service with alice, bob and carol registered and alice logged in."""
    service.register("alice", "pw1")
    service.register("bob", "pw2")
    service.register("carol", "pw3")
    service.authenticate("alice", "pw1")
    return service


CONFIG_ENV_VARS = [
    "SHEET_ACCESS_AUTO_LOGIN",
    "SHEET_ACCESS_BCRYPT_ROUNDS",
    "SHEET_ACCESS_HOST",
    "SHEET_ACCESS_PORT",
    "SHEET_ACCESS_LOG_LEVEL",
    "SHEET_ACCESS_LOG_JSON",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every SHEET_ACCESS_* override so config tests see only their inputs."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
