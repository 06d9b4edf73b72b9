from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import day_bounds, now_local
from ..common.images import decode_data_url, is_data_url
from ..common.validators import require_non_empty
from ..core.enums import FailureReason
from ..core.exceptions import ConfigurationError, DuplicateAttendanceError, StorageError, ValidationError
from ..identities.repository import CandidateRepository
from ..recognition.model import MatchSelection
from ..recognition.selector import MatchSelector
from ..settings import CheckpointSettings
from .outcome import Outcome
from .repository import AttendanceLedger

logger = logging.getLogger(__name__)


class FaceScanAttendanceService:
    """Turns one captured face image into exactly one Outcome.

    Flow: validate input -> load candidates -> select best match -> apply the
    confidence threshold -> same-day duplicate check -> write the present record.
    Every terminal state is reached in a single pass; retrying is up to the caller.
    """

    def __init__(
        self,
        candidates: CandidateRepository,
        ledger: AttendanceLedger,
        selector: MatchSelector,
        *,
        settings: CheckpointSettings | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._candidates = candidates
        self._ledger = ledger
        self._selector = selector
        self._settings = settings or CheckpointSettings()
        self._clock = clock

    def verify_and_mark(
        self,
        captured_image: Optional[str],
        *,
        lighting_ok: Optional[bool] = None,
        now: datetime | None = None,
    ) -> Outcome:
        try:
            probe = require_non_empty(captured_image, "capturedImage")
            if is_data_url(probe):
                decode_data_url(probe)
        except ValidationError as e:
            logger.info("Rejected face scan: %s", e)
            return Outcome.failed(FailureReason.NO_IMAGE)

        if lighting_ok is False:
            return Outcome.failed(FailureReason.POOR_LIGHTING)

        try:
            candidates = list(self._candidates.list_with_face_images())
        except StorageError:
            logger.exception("Error fetching profiles")
            return Outcome.failed(FailureReason.DATABASE_ERROR, message="Failed to fetch profiles")

        if not candidates:
            return Outcome.failed(FailureReason.NO_REGISTERED_FACES)

        try:
            self._selector.ensure_ready()
        except ConfigurationError as e:
            logger.error("Face comparison unavailable: %s", e)
            return Outcome.failed(FailureReason.CONFIG_ERROR)

        logger.info("Comparing captured face against %d registered faces", len(candidates))
        now = now or self._clock()
        selection = self._selector.select_best(probe, candidates)
        best = selection.best

        if best is None or best.confidence <= self._settings.confidence_threshold:
            logger.info(
                "No match found. Highest confidence: %s (compared=%d skipped=%d)",
                selection.confidence,
                selection.compared,
                selection.skipped,
            )
            self._audit_failure(selection, now=now)
            return Outcome.failed(
                FailureReason.NO_MATCH,
                message=(
                    "No matching face found in the database. Please try again or contact admin. "
                    f"(highest confidence: {selection.confidence:g}%)"
                ),
                confidence=selection.confidence,
            )

        identity = best.identity
        day_start, day_end = day_bounds(now)
        try:
            if self._ledger.has_present_between(identity.user_id, day_start, day_end):
                return Outcome.already_marked(identity, best.confidence)
        except StorageError:
            logger.exception("Error checking today's attendance for %s", identity.user_id)
            return Outcome.failed(FailureReason.DATABASE_ERROR, message="Failed to check attendance")

        try:
            record = self._ledger.record_present(identity=identity, marked_at=now, confidence=best.confidence)
        except DuplicateAttendanceError:
            return Outcome.already_marked(identity, best.confidence)
        except StorageError:
            logger.exception("Error inserting attendance for %s", identity.user_id)
            return Outcome.failed(FailureReason.DATABASE_ERROR)

        logger.info(
            "Attendance #%s marked for %s with confidence %s%%",
            record.attendance_id,
            identity.full_name,
            best.confidence,
        )
        return Outcome.success(identity, best.confidence)

    def _audit_failure(self, selection: MatchSelection, *, now: datetime) -> None:
        """Best-effort failed-attempt audit row; never affects the outcome."""
        if not self._settings.record_failed_attempts:
            return
        try:
            self._ledger.record_failed(
                identity=selection.best.identity if selection.best else None,
                marked_at=now,
                reason=FailureReason.NO_MATCH.value,
                confidence=selection.confidence,
            )
        except StorageError as e:
            logger.warning("Could not record failed attempt: %s", e)
