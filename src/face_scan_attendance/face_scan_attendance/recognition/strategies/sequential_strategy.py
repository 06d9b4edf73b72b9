from __future__ import annotations

from typing import List, Optional, Sequence

from ...identities.model import Identity
from ..model import ComparisonResult
from .base import CompareFn, ScanStrategy


class SequentialScanStrategy(ScanStrategy):
    """One oracle call at a time."""

    def scan(self, candidates: Sequence[Identity], compare: CompareFn) -> List[Optional[ComparisonResult]]:
        return [compare(c) for c in candidates]
