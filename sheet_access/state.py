"""
Shared in-memory state.

One AccessState holds the account directory, the logged-in set and the
per-owner sharing records. It is built by the composing application and
handed to every component; nothing in the package keeps a global instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .access.permissions import SharingRecord
    from .identity.types import Account


@dataclass
class AccessState:
    """Mutable state guarded by a single lock.

    Every component operation takes ``lock`` for the whole read-modify-write,
    so each operation is linearizable and readers never see a half-applied
    role transition.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    logged_in: set[str] = field(default_factory=set)
    # dict preserves insertion order, so owners list in record-creation order
    sharing: dict[str, SharingRecord] = field(default_factory=dict)
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)
