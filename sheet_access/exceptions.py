"""
Custom exceptions for the sheet access service.

Every business-rule failure is raised as a subclass of SheetAccessError.
Each subclass carries a closed ErrorKind tag so the transport layer can map
failures to status codes without inspecting message text.
"""

from enum import Enum


class ErrorKind(Enum):
    """Structured error kinds exposed to callers."""

    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    BAD_CREDENTIAL = "bad_credential"
    ALREADY_LOGGED_IN = "already_logged_in"
    NOT_LOGGED_IN = "not_logged_in"
    SELF_SHARE = "self_share"
    NO_SHARING_RECORD = "no_sharing_record"
    NO_ACCESS_TO_REVOKE = "no_access_to_revoke"
    INVALID_ROLE = "invalid_role"
    VALIDATION = "validation"


class SheetAccessError(Exception):
    """Base exception for all sheet access errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AccountExistsError(SheetAccessError):
    """Raised when registering a username that is already taken."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, username: str):
        super().__init__(f"Account already exists: {username}", {"username": username})
        self.username = username


class AccountNotFoundError(SheetAccessError):
    """Raised when an operation names an account that is not registered.

    ``role`` says which argument was missing ("account", "owner" or "target").
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, username: str, role: str = "account"):
        super().__init__(
            f"Account not found: {username}",
            {"username": username, "role": role},
        )
        self.username = username
        self.role = role


class BadCredentialError(SheetAccessError):
    """Raised when a password does not match the stored digest."""

    kind = ErrorKind.BAD_CREDENTIAL

    def __init__(self, username: str):
        super().__init__(f"Invalid credentials for {username}", {"username": username})
        self.username = username


class AlreadyLoggedInError(SheetAccessError):
    """Raised when logging in an account that already has a session."""

    kind = ErrorKind.ALREADY_LOGGED_IN

    def __init__(self, username: str):
        super().__init__(f"Already logged in: {username}", {"username": username})
        self.username = username


class NotLoggedInError(SheetAccessError):
    """Raised when an operation requires a session the account does not have."""

    kind = ErrorKind.NOT_LOGGED_IN

    def __init__(self, username: str):
        super().__init__(f"Not logged in: {username}", {"username": username})
        self.username = username


class SelfShareError(SheetAccessError):
    """Raised when an owner tries to grant a role on their own sheet to themselves."""

    kind = ErrorKind.SELF_SHARE

    def __init__(self, username: str):
        super().__init__(f"Cannot share a sheet with its owner: {username}", {"username": username})
        self.username = username


class NoSharingRecordError(SheetAccessError):
    """Raised when revoking on behalf of an owner who has never shared."""

    kind = ErrorKind.NO_SHARING_RECORD

    def __init__(self, owner: str):
        super().__init__(f"No sharing record for owner: {owner}", {"owner": owner})
        self.owner = owner


class NoAccessToRevokeError(SheetAccessError):
    """Raised when the revoke target holds neither role on the owner's sheet."""

    kind = ErrorKind.NO_ACCESS_TO_REVOKE

    def __init__(self, owner: str, target: str):
        super().__init__(
            f"{target} has no access to {owner}'s sheet",
            {"owner": owner, "target": target},
        )
        self.owner = owner
        self.target = target


class ValidationError(SheetAccessError):
    """Raised when input or configuration validation fails."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: str, value: str | None = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Validation failed for {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value


class InvalidRoleError(ValidationError):
    """Raised when a role string is neither "collaborator" nor "viewer"."""

    kind = ErrorKind.INVALID_ROLE

    def __init__(self, value: str):
        super().__init__("role", "must be 'collaborator' or 'viewer'", value)
