from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import AttendanceMethod
from ..identities.model import Identity
from .model import AttendanceRecord


class AttendanceLedger(Protocol):
    """Repository interface for attendance facts.

    Implementations raise StorageError on read/write failure, and
    DuplicateAttendanceError from `record_present` when the identity already has
    a present record for that calendar day.
    """

    def has_present_between(self, user_id: str, start: datetime, end: datetime) -> bool:
        """True if a present record exists with start <= marked_at < end."""

        raise NotImplementedError

    def record_present(
        self,
        *,
        identity: Identity,
        marked_at: datetime,
        confidence: float,
        method: AttendanceMethod = AttendanceMethod.FACE_SCAN,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def record_failed(
        self,
        *,
        identity: Optional[Identity],
        marked_at: datetime,
        reason: str,
        confidence: Optional[float] = None,
        method: AttendanceMethod = AttendanceMethod.FACE_SCAN,
    ) -> AttendanceRecord:
        """Audit trail entry for a rejected attempt (identity None = unknown person)."""

        raise NotImplementedError
