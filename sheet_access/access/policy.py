"""Sharing policy: how an owner's collaborator and viewer grants evolve."""

import logging

from ..exceptions import (
    AccountNotFoundError,
    NoAccessToRevokeError,
    NoSharingRecordError,
    NotLoggedInError,
    SelfShareError,
)
from ..identity.directory import AccountDirectory
from ..identity.sessions import SessionTracker
from ..logging_utils import access_context
from ..state import AccessState
from .permissions import SharingRecord, SharingSnapshot, ShareRole, SheetAccess, SheetView

logger = logging.getLogger(__name__)


class SharingPolicyEngine:
    """Applies role grants and revocations to per-owner sharing records.

    For any (owner, target) pair the target is in exactly one of three
    states: no access, viewer, or collaborator. Each public method runs as
    one critical section on the shared state lock and validates every
    precondition before mutating, so a failed call leaves no trace.
    """

    def __init__(
        self,
        state: AccessState,
        directory: AccountDirectory,
        sessions: SessionTracker,
    ):
        """Initialize the engine.

        Args:
            state: Shared service state
            directory: Account existence checks
            sessions: Login gating for grants
        """
        self.state = state
        self.directory = directory
        self.sessions = sessions

    def assign(self, owner: str, target: str, role: ShareRole) -> None:
        """Grant ``role`` on owner's sheet to target."""
        if role is ShareRole.COLLABORATOR:
            self.assign_collaborator(owner, target)
        else:
            self.assign_viewer(owner, target)

    def assign_collaborator(self, owner: str, target: str) -> None:
        """Make target the owner's collaborator.

        A different existing collaborator is demoted to viewer; a target
        that was a viewer is promoted out of the viewer list.

        Raises:
            AccountNotFoundError: If owner or target is not registered
            NotLoggedInError: If owner has no session
            SelfShareError: If target is owner
        """
        with self.state.lock:
            self._check_grant(owner, target)
            record = self._record_for(owner)

            previous = record.collaborator
            if previous is not None and previous != target:
                record.add_viewer(previous)
                logger.debug(
                    f"Demoted {previous} to viewer on {owner}'s sheet",
                    extra=access_context("demote", owner=owner, target=previous, role="viewer"),
                )

            if record.remove_viewer(target):
                logger.debug(
                    f"Promoted {target} from viewer on {owner}'s sheet",
                    extra=access_context("promote", owner=owner, target=target, role="collaborator"),
                )

            record.collaborator = target

        logger.info(
            f"{owner} granted collaborator to {target}",
            extra=access_context("grant", owner=owner, target=target, role="collaborator"),
        )

    def assign_viewer(self, owner: str, target: str) -> None:
        """Add target to the owner's viewers.

        If target is the current collaborator, the collaborator slot is
        cleared first. Repeating the grant is a no-op.

        Raises:
            AccountNotFoundError: If owner or target is not registered
            NotLoggedInError: If owner has no session
            SelfShareError: If target is owner
        """
        with self.state.lock:
            self._check_grant(owner, target)
            record = self._record_for(owner)

            if record.collaborator == target:
                record.collaborator = None
                logger.debug(
                    f"Cleared collaborator {target} on {owner}'s sheet",
                    extra=access_context("demote", owner=owner, target=target),
                )

            record.add_viewer(target)

        logger.info(
            f"{owner} granted viewer to {target}",
            extra=access_context("grant", owner=owner, target=target, role="viewer"),
        )

    def revoke_access(self, owner: str, target: str) -> None:
        """Remove whatever role target holds on owner's sheet.

        Raises:
            AccountNotFoundError: If owner is not registered
            NoSharingRecordError: If owner has never shared
            NoAccessToRevokeError: If target holds no role
        """
        with self.state.lock:
            if not self.directory.exists(owner):
                raise AccountNotFoundError(owner, role="owner")
            record = self.state.sharing.get(owner)
            if record is None:
                raise NoSharingRecordError(owner)

            if record.collaborator == target:
                record.collaborator = None
            elif not record.remove_viewer(target):
                raise NoAccessToRevokeError(owner, target)

        logger.info(
            f"{owner} revoked access for {target}",
            extra=access_context("revoke", owner=owner, target=target),
        )

    def list_accessible_sheets(self, username: str) -> list[SheetView]:
        """List every sheet username can reach, own sheet first.

        Shared sheets follow in the order their owners first shared.

        Raises:
            AccountNotFoundError: If username is not registered
        """
        with self.state.lock:
            if not self.directory.exists(username):
                raise AccountNotFoundError(username)

            sheets = [SheetView(owner=username, access=SheetAccess.OWNER)]
            for owner, record in self.state.sharing.items():
                if record.collaborator == username:
                    sheets.append(SheetView(owner=owner, access=SheetAccess.COLLABORATOR))
                if username in record.viewers:
                    sheets.append(SheetView(owner=owner, access=SheetAccess.VIEWER))
            return sheets

    def sharing_record(self, owner: str) -> SharingSnapshot | None:
        """Snapshot of owner's grants, or None if owner has never shared."""
        with self.state.lock:
            record = self.state.sharing.get(owner)
            return record.snapshot() if record is not None else None

    def _check_grant(self, owner: str, target: str) -> None:
        if not self.directory.exists(owner):
            raise AccountNotFoundError(owner, role="owner")
        if not self.sessions.is_logged_in(owner):
            raise NotLoggedInError(owner)
        if not self.directory.exists(target):
            raise AccountNotFoundError(target, role="target")
        if target == owner:
            raise SelfShareError(owner)

    def _record_for(self, owner: str) -> SharingRecord:
        record = self.state.sharing.get(owner)
        if record is None:
            record = SharingRecord(owner=owner)
            self.state.sharing[owner] = record
        return record
