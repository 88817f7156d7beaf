"""Role and sharing types for access control."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import InvalidRoleError


class ShareRole(Enum):
    """Roles an owner can grant on their sheet."""

    COLLABORATOR = "collaborator"
    VIEWER = "viewer"

    @classmethod
    def parse(cls, value: str) -> ShareRole:
        """Parse a role name received at the service boundary.

        Raises:
            InvalidRoleError: If the value names no role
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidRoleError(value) from None


class SheetAccess(Enum):
    """How a user reaches a sheet in a listing."""

    OWNER = "owner"
    COLLABORATOR = "collaborator"
    VIEWER = "viewer"


@dataclass(frozen=True)
class SheetView:
    """One sheet a user can see."""

    owner: str
    access: SheetAccess


@dataclass(frozen=True)
class SharingSnapshot:
    """Read-only copy of an owner's sharing record."""

    owner: str
    collaborator: str | None
    viewers: tuple[str, ...]

    def role_of(self, username: str) -> ShareRole | None:
        if self.collaborator == username:
            return ShareRole.COLLABORATOR
        if username in self.viewers:
            return ShareRole.VIEWER
        return None


@dataclass
class SharingRecord:
    """An owner's grants: at most one collaborator plus any number of viewers.

    ``viewers`` has set semantics but keeps insertion order, so a demoted
    collaborator lands at the end of the list.
    """

    owner: str
    collaborator: str | None = None
    viewers: list[str] = field(default_factory=list)

    def add_viewer(self, username: str) -> bool:
        """Append a viewer unless already present. Returns True if added."""
        if username in self.viewers:
            return False
        self.viewers.append(username)
        return True

    def remove_viewer(self, username: str) -> bool:
        """Remove a viewer if present. Returns True if removed."""
        if username not in self.viewers:
            return False
        self.viewers.remove(username)
        return True

    def snapshot(self) -> SharingSnapshot:
        return SharingSnapshot(
            owner=self.owner,
            collaborator=self.collaborator,
            viewers=tuple(self.viewers),
        )
