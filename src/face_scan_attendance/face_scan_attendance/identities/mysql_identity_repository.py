from __future__ import annotations

from typing import Sequence

import mysql.connector

from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Identity
from .repository import CandidateRepository


class MySQLCandidateRepository(CandidateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_face_images(self) -> Sequence[Identity]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT user_id, full_name, enrollment_number, roll_number, face_image_url
                    FROM profiles
                    WHERE face_image_url IS NOT NULL AND face_image_url <> ''
                    ORDER BY user_id ASC
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StorageError("Failed to fetch profiles") from e

        return [
            Identity(
                user_id=str(r["user_id"]),
                full_name=r["full_name"],
                enrollment_number=r.get("enrollment_number"),
                roll_number=r.get("roll_number"),
                face_image_url=r.get("face_image_url"),
            )
            for r in rows
        ]
