"""
Credential verifier interface and bcrypt implementation.
"""

from abc import ABC, abstractmethod

import bcrypt

from ..exceptions import ValidationError

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class CredentialVerifier(ABC):
    """Abstract password hashing capability.

    Implementations must use a slow, salted, one-way function suitable
    for password storage.
    """

    @abstractmethod
    def hash(self, plaintext: str) -> bytes:
        """Derive a storable digest from a plaintext password."""
        ...

    @abstractmethod
    def matches(self, plaintext: str, digest: bytes) -> bool:
        """Check a plaintext password against a digest produced by hash()."""
        ...


class BcryptVerifier(CredentialVerifier):
    """Credential verifier backed by bcrypt."""

    def __init__(self, rounds: int = 12):
        """Initialize the verifier.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self.rounds = rounds

    def hash(self, plaintext: str) -> bytes:
        return bcrypt.hashpw(self._encode(plaintext), bcrypt.gensalt(rounds=self.rounds))

    def matches(self, plaintext: str, digest: bytes) -> bool:
        encoded = plaintext.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, digest)

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        encoded = plaintext.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                "password", f"must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes when UTF-8 encoded"
            )
        return encoded
