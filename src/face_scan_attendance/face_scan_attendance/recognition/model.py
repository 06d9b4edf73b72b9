from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..identities.model import Identity


@dataclass(frozen=True)
class FaceVerdict:
    """What the similarity oracle said about one pair of faces."""

    match: bool
    confidence: float
    reason: Optional[str] = None


@dataclass(frozen=True)
class ComparisonResult:
    """Ephemeral per-candidate result; never persisted."""

    identity: Identity
    match: bool
    confidence: float


@dataclass(frozen=True)
class MatchSelection:
    """Outcome of scanning one candidate set."""

    best: Optional[ComparisonResult]
    compared: int
    skipped: int

    @property
    def confidence(self) -> float:
        return self.best.confidence if self.best else 0.0
