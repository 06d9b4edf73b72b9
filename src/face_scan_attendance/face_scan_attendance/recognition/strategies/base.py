from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from ...identities.model import Identity
from ..model import ComparisonResult

CompareFn = Callable[[Identity], Optional[ComparisonResult]]


class ScanStrategy(ABC):
    """Strategy Pattern: encapsulate how the candidate set is walked.

    Implementations must return one entry per candidate, in candidate order
    (None for a skipped candidate), whatever order the comparisons ran in.
    """

    @abstractmethod
    def scan(self, candidates: Sequence[Identity], compare: CompareFn) -> List[Optional[ComparisonResult]]:
        raise NotImplementedError
