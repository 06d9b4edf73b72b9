from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ...identities.model import Identity
from ..model import ComparisonResult
from .base import CompareFn, ScanStrategy


class PooledScanStrategy(ScanStrategy):
    """Oracle calls on a bounded thread pool; results come back in candidate order."""

    def __init__(self, max_workers: int):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._max_workers = int(max_workers)

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def scan(self, candidates: Sequence[Identity], compare: CompareFn) -> List[Optional[ComparisonResult]]:
        if not candidates:
            return []
        workers = min(self._max_workers, len(candidates))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="face-compare") as pool:
            return list(pool.map(compare, candidates))
