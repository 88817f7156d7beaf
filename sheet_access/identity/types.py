"""
Identity types.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Account:
    """A registered account.

    The username is the identity: unique, case-sensitive and immutable.
    """

    username: str
    password_digest: bytes = field(repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "username": self.username,
            "created_at": self.created_at.isoformat(),
            # Note: password_digest intentionally excluded
        }
