"""Access control module for sheet sharing."""

from .permissions import SharingRecord, SharingSnapshot, ShareRole, SheetAccess, SheetView
from .policy import SharingPolicyEngine

__all__ = [
    "SharingPolicyEngine",
    "SharingRecord",
    "SharingSnapshot",
    "ShareRole",
    "SheetAccess",
    "SheetView",
]
