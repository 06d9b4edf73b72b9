from __future__ import annotations

import json
import math
import re
from typing import Protocol

from ..common.validators import clamp
from ..core.constants import MAX_CONFIDENCE, MIN_CONFIDENCE
from ..core.exceptions import ComparisonError
from .model import FaceVerdict

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class SimilarityOracle(Protocol):
    """Black box that scores two face images for same-person likelihood."""

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the oracle cannot be called at all."""

        raise NotImplementedError

    def compare(self, probe: str, reference: str) -> FaceVerdict:
        """Compare two `data:` URL images.

        Raises ComparisonError when the call fails or the reply is unusable.
        """

        raise NotImplementedError


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def parse_verdict(content: str) -> FaceVerdict:
    """Parse an oracle reply into a FaceVerdict.

    The reply may wrap the JSON object in prose or a markdown code fence; the
    outermost `{...}` block is used.
    """
    if not content or not content.strip():
        raise ComparisonError("Empty verdict")

    m = _JSON_OBJECT_RE.search(content)
    raw = m.group(0) if m else content
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ComparisonError(f"Unparseable verdict: {content[:200]!r}") from e

    if not isinstance(data, dict) or "confidence" not in data:
        raise ComparisonError(f"Verdict missing confidence: {content[:200]!r}")

    try:
        confidence = float(data["confidence"])
    except (TypeError, ValueError) as e:
        raise ComparisonError(f"Non-numeric confidence: {data['confidence']!r}") from e
    if math.isnan(confidence):
        raise ComparisonError("Confidence is NaN")

    reason = data.get("reason")
    return FaceVerdict(
        match=_as_bool(data.get("match")),
        confidence=clamp(confidence, MIN_CONFIDENCE, MAX_CONFIDENCE),
        reason=str(reason) if reason is not None else None,
    )
