import pytest

from src.face_scan_attendance.face_scan_attendance.recognition.factory import ScanStrategyFactory
from src.face_scan_attendance.face_scan_attendance.recognition.strategies.pooled_strategy import PooledScanStrategy
from src.face_scan_attendance.face_scan_attendance.recognition.strategies.sequential_strategy import SequentialScanStrategy


def test_factory_single_worker_is_sequential():
    factory = ScanStrategyFactory()
    strategy = factory.for_workers(1)

    assert isinstance(strategy, SequentialScanStrategy)


def test_factory_multiple_workers_is_pooled_and_capped():
    factory = ScanStrategyFactory()
    strategy = factory.for_workers(4)

    assert isinstance(strategy, PooledScanStrategy)
    assert strategy.max_workers == 4


def test_pooled_strategy_rejects_zero_workers():
    with pytest.raises(ValueError):
        PooledScanStrategy(0)


def test_pooled_strategy_with_no_candidates_returns_empty():
    assert PooledScanStrategy(2).scan([], lambda identity: None) == []
