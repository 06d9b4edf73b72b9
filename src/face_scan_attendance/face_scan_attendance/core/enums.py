from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status values stored in the database."""

    PRESENT = "present"
    FAILED = "failed"


class AttendanceMethod(str, Enum):
    FACE_SCAN = "face_scan"


class OutcomeStatus(str, Enum):
    """Top-level `status` discriminator of a face scan response."""

    SUCCESS = "success"
    ALREADY_MARKED = "already_marked"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Reason codes carried by `failed` outcomes."""

    NO_IMAGE = "no_image"
    POOR_LIGHTING = "poor_lighting"
    NO_REGISTERED_FACES = "no_registered_faces"
    NO_MATCH = "no_match"
    CONFIG_ERROR = "config_error"
    DATABASE_ERROR = "database_error"
    SERVER_ERROR = "server_error"
