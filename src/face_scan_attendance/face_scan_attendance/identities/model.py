from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNKNOWN_ENROLLMENT


@dataclass(frozen=True)
class Identity:
    """Domain entity: a registered person with one enrolled reference face.

    Note: Plain data object (no DB access code).
    """

    user_id: str
    full_name: str
    enrollment_number: Optional[str]
    roll_number: Optional[str]
    face_image_url: Optional[str]

    @property
    def enrollment_code(self) -> Optional[str]:
        """Enrollment number, falling back to roll number."""
        return self.enrollment_number or self.roll_number or None

    def to_student(self) -> dict:
        return {
            "name": self.full_name,
            "enroll": self.enrollment_code or UNKNOWN_ENROLLMENT,
        }
