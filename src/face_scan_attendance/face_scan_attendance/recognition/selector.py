from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..core.exceptions import ComparisonError, ReferenceImageError
from ..identities.model import Identity
from .model import ComparisonResult, MatchSelection
from .oracle import SimilarityOracle
from .reference_images import ReferenceImageResolver
from .strategies.base import ScanStrategy
from .strategies.sequential_strategy import SequentialScanStrategy

logger = logging.getLogger(__name__)


def fold_best(results: Iterable[Optional[ComparisonResult]]) -> Optional[ComparisonResult]:
    """Highest-confidence matching result; the first one wins a tie."""
    best: Optional[ComparisonResult] = None
    for result in results:
        if result is None or not result.match:
            continue
        if best is None or result.confidence > best.confidence:
            best = result
    return best


class MatchSelector:
    """Finds the single best-matching identity for a probe image.

    Performs no writes. A candidate whose reference image cannot be resolved,
    or whose comparison fails, is skipped and logged; it never aborts the scan.
    """

    def __init__(
        self,
        oracle: SimilarityOracle,
        resolver: ReferenceImageResolver,
        *,
        strategy: ScanStrategy | None = None,
    ):
        self._oracle = oracle
        self._resolver = resolver
        self._strategy = strategy or SequentialScanStrategy()

    def ensure_ready(self) -> None:
        """Raise ConfigurationError if the oracle cannot be used at all."""
        self._oracle.ensure_configured()

    def _compare(self, probe: str, identity: Identity) -> Optional[ComparisonResult]:
        try:
            reference = self._resolver.resolve(identity.face_image_url)
        except ReferenceImageError as e:
            logger.warning("Skipping %s (%s): reference image unavailable: %s", identity.full_name, identity.user_id, e)
            return None
        except Exception:
            logger.exception("Skipping %s (%s): error loading reference image", identity.full_name, identity.user_id)
            return None

        try:
            verdict = self._oracle.compare(probe, reference)
        except ComparisonError as e:
            logger.warning("Skipping %s (%s): comparison failed: %s", identity.full_name, identity.user_id, e)
            return None
        except Exception:
            logger.exception("Skipping %s (%s): error comparing faces", identity.full_name, identity.user_id)
            return None

        logger.info(
            "Compared with %s: match=%s confidence=%.1f",
            identity.full_name,
            verdict.match,
            verdict.confidence,
        )
        return ComparisonResult(identity=identity, match=verdict.match, confidence=verdict.confidence)

    def select_best(self, probe: str, candidates: Sequence[Identity]) -> MatchSelection:
        results = self._strategy.scan(candidates, lambda identity: self._compare(probe, identity))
        skipped = sum(1 for r in results if r is None)
        return MatchSelection(
            best=fold_best(results),
            compared=len(results) - skipped,
            skipped=skipped,
        )
