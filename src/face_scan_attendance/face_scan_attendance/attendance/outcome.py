from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import FailureReason, OutcomeStatus
from ..identities.model import Identity

_FAILURE_HTTP_STATUS = {
    FailureReason.NO_IMAGE: 400,
    FailureReason.POOR_LIGHTING: 400,
    FailureReason.NO_REGISTERED_FACES: 404,
    FailureReason.NO_MATCH: 404,
    FailureReason.CONFIG_ERROR: 500,
    FailureReason.DATABASE_ERROR: 500,
    FailureReason.SERVER_ERROR: 500,
}

_FAILURE_MESSAGES = {
    FailureReason.NO_IMAGE: "No image provided",
    FailureReason.POOR_LIGHTING: "Poor lighting detected. Please move to a well-lit area.",
    FailureReason.NO_REGISTERED_FACES: "No registered faces in the system",
    FailureReason.NO_MATCH: "No matching face found in the database. Please try again or contact admin.",
    FailureReason.CONFIG_ERROR: "AI service not configured",
    FailureReason.DATABASE_ERROR: "Failed to mark attendance",
    FailureReason.SERVER_ERROR: "An unexpected error occurred",
}


@dataclass(frozen=True)
class Outcome:
    """Terminal, caller-visible result of one verification attempt."""

    status: OutcomeStatus
    message: str
    identity: Optional[Identity] = None
    confidence: Optional[float] = None
    reason: Optional[FailureReason] = None

    @classmethod
    def success(cls, identity: Identity, confidence: float) -> "Outcome":
        return cls(
            status=OutcomeStatus.SUCCESS,
            message="Attendance marked successfully",
            identity=identity,
            confidence=confidence,
        )

    @classmethod
    def already_marked(cls, identity: Identity, confidence: float) -> "Outcome":
        return cls(
            status=OutcomeStatus.ALREADY_MARKED,
            message="Attendance already marked for today",
            identity=identity,
            confidence=confidence,
        )

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        *,
        message: Optional[str] = None,
        confidence: Optional[float] = None,
    ) -> "Outcome":
        return cls(
            status=OutcomeStatus.FAILED,
            message=message or _FAILURE_MESSAGES[reason],
            confidence=confidence,
            reason=reason,
        )

    @property
    def http_status(self) -> int:
        if self.reason is None:
            return 200
        return _FAILURE_HTTP_STATUS[self.reason]

    def to_payload(self) -> dict:
        payload: dict = {"status": self.status.value, "message": self.message}
        if self.reason is not None:
            payload["reason"] = self.reason.value
        if self.identity is not None:
            payload["student"] = self.identity.to_student()
        if self.confidence is not None and self.status != OutcomeStatus.ALREADY_MARKED:
            payload["confidence"] = self.confidence
        return payload
