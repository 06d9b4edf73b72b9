from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import ScanStrategy
from .strategies.pooled_strategy import PooledScanStrategy
from .strategies.sequential_strategy import SequentialScanStrategy


@dataclass
class ScanStrategyFactory:
    """Factory Pattern: choose the scan strategy from the worker budget."""

    def for_workers(self, max_workers: int) -> ScanStrategy:
        if max_workers <= 1:
            return SequentialScanStrategy()
        return PooledScanStrategy(max_workers)
