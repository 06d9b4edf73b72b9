from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.enums import AttendanceMethod, AttendanceStatus
from ..core.exceptions import DuplicateAttendanceError, StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..identities.model import Identity
from .model import AttendanceRecord
from .repository import AttendanceLedger

logger = logging.getLogger(__name__)


class MySQLAttendanceRepository(AttendanceLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_present_between(self, user_id: str, start: datetime, end: datetime) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT attendance_id
                    FROM attendance_records
                    WHERE user_id=%s AND status=%s AND marked_at >= %s AND marked_at < %s
                    LIMIT 1
                    """,
                    (user_id, AttendanceStatus.PRESENT.value, start, end),
                )
                return fetchone(cur) is not None
        except mysql.connector.Error as e:
            raise StorageError("Failed to check today's attendance") from e

    def record_present(
        self,
        *,
        identity: Identity,
        marked_at: datetime,
        confidence: float,
        method: AttendanceMethod = AttendanceMethod.FACE_SCAN,
    ) -> AttendanceRecord:
        try:
            return self._insert(
                user_id=identity.user_id,
                status=AttendanceStatus.PRESENT,
                method=method,
                face_verified=True,
                student_name=identity.full_name,
                enrollment_number=identity.enrollment_code,
                confidence=confidence,
                note=None,
                marked_at=marked_at,
            )
        except mysql.connector.IntegrityError as e:
            if e.errno == MYSQL_DUPLICATE_KEY_ERRNO:
                logger.info("Duplicate present insert rejected for %s", identity.user_id)
                raise DuplicateAttendanceError(
                    f"Attendance already marked for {identity.user_id} on {marked_at.date()}"
                ) from e
            raise StorageError("Failed to mark attendance") from e
        except mysql.connector.Error as e:
            raise StorageError("Failed to mark attendance") from e

    def record_failed(
        self,
        *,
        identity: Optional[Identity],
        marked_at: datetime,
        reason: str,
        confidence: Optional[float] = None,
        method: AttendanceMethod = AttendanceMethod.FACE_SCAN,
    ) -> AttendanceRecord:
        try:
            return self._insert(
                user_id=identity.user_id if identity else None,
                status=AttendanceStatus.FAILED,
                method=method,
                face_verified=False,
                student_name=identity.full_name if identity else None,
                enrollment_number=identity.enrollment_code if identity else None,
                confidence=confidence,
                note=reason,
                marked_at=marked_at,
            )
        except mysql.connector.Error as e:
            raise StorageError("Failed to record failed attempt") from e

    def _insert(
        self,
        *,
        user_id: Optional[str],
        status: AttendanceStatus,
        method: AttendanceMethod,
        face_verified: bool,
        student_name: Optional[str],
        enrollment_number: Optional[str],
        confidence: Optional[float],
        note: Optional[str],
        marked_at: datetime,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, status, method, face_verified, student_name,
                    enrollment_number, confidence, note, marked_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    status.value,
                    method.value,
                    int(face_verified),
                    student_name,
                    enrollment_number,
                    confidence,
                    note,
                    marked_at,
                ),
            )
            attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            status=status,
            method=method,
            face_verified=face_verified,
            marked_at=marked_at,
            student_name=student_name,
            enrollment_number=enrollment_number,
            confidence=confidence,
            note=note,
        )
