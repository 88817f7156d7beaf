"""
Identity management for the sheet access service.

Provides the account directory, session tracking and the
credential verifier used to hash and check passwords.
"""

from .directory import AccountDirectory
from .sessions import SessionTracker
from .types import Account
from .verifier import BcryptVerifier, CredentialVerifier

__all__ = [
    # Types
    "Account",
    # Components
    "AccountDirectory",
    "SessionTracker",
    # Verifiers
    "CredentialVerifier",
    "BcryptVerifier",
]
