"""
Sheet Access

In-memory access control for per-account sheets.

Provides:
- Account registration with bcrypt credential digests
- Session tracking that gates sharing operations
- Per-owner sharing: one collaborator, any number of viewers,
  with promotion and demotion on role changes
- A FastAPI transport (sheet_access.api)

Usage:

    >>> from sheet_access import AccessConfig, AccessService, ShareRole
    >>> service = AccessService.from_config(AccessConfig())
    >>> service.register("alice", "pw1")
    >>> service.register("bob", "pw2")
    >>> service.authenticate("alice", "pw1")
    >>> service.grant_role("alice", "bob", ShareRole.COLLABORATOR)
    >>> service.list_sheets("bob")
"""

from .access import (
    SharingPolicyEngine,
    SharingSnapshot,
    ShareRole,
    SheetAccess,
    SheetView,
)
from .config import AccessConfig
from .exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    AlreadyLoggedInError,
    BadCredentialError,
    ErrorKind,
    InvalidRoleError,
    NoAccessToRevokeError,
    NoSharingRecordError,
    NotLoggedInError,
    SelfShareError,
    SheetAccessError,
    ValidationError,
)
from .identity import Account, AccountDirectory, BcryptVerifier, CredentialVerifier, SessionTracker
from .service import AccessService
from .state import AccessState

__version__ = "0.1.0"

__all__ = [
    # Service
    "AccessService",
    "AccessState",
    "AccessConfig",
    # Components
    "AccountDirectory",
    "SessionTracker",
    "SharingPolicyEngine",
    "CredentialVerifier",
    "BcryptVerifier",
    # Types
    "Account",
    "ShareRole",
    "SheetAccess",
    "SheetView",
    "SharingSnapshot",
    # Errors
    "ErrorKind",
    "SheetAccessError",
    "AccountExistsError",
    "AccountNotFoundError",
    "BadCredentialError",
    "AlreadyLoggedInError",
    "NotLoggedInError",
    "SelfShareError",
    "NoSharingRecordError",
    "NoAccessToRevokeError",
    "InvalidRoleError",
    "ValidationError",
]
