from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceMethod, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance fact.

    `user_id` is None for failed attempts that could not be attributed to anyone.
    """

    attendance_id: int
    user_id: Optional[str]
    status: AttendanceStatus
    method: AttendanceMethod
    face_verified: bool
    marked_at: datetime
    student_name: Optional[str] = None
    enrollment_number: Optional[str] = None
    confidence: Optional[float] = None
    note: Optional[str] = None
