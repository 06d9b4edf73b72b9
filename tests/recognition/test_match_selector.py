from __future__ import annotations

import threading
import time

from PIL import Image

from src.face_scan_attendance.face_scan_attendance.core.exceptions import ComparisonError, ReferenceImageError
from src.face_scan_attendance.face_scan_attendance.identities.model import Identity
from src.face_scan_attendance.face_scan_attendance.recognition.model import ComparisonResult, FaceVerdict
from src.face_scan_attendance.face_scan_attendance.recognition.reference_images import StorageConfig, StorageImageResolver
from src.face_scan_attendance.face_scan_attendance.recognition.selector import MatchSelector, fold_best
from src.face_scan_attendance.face_scan_attendance.recognition.strategies.pooled_strategy import PooledScanStrategy

PROBE = "data:image/jpeg;base64,cHJvYmU="


def make_identity(user_id: str, name: str | None = None) -> Identity:
    return Identity(
        user_id=user_id,
        full_name=name or f"Student {user_id}",
        enrollment_number=f"EN-{user_id}",
        roll_number=None,
        face_image_url=f"ref-{user_id}",
    )


class StubResolver:
    def __init__(self, broken: set[str] | None = None):
        self._broken = broken or set()

    def resolve(self, handle):
        if handle in self._broken:
            raise ReferenceImageError(f"cannot fetch {handle}")
        return f"data:image/jpeg;base64,{handle}"


class StubOracle:
    """Verdicts keyed by reference handle; an Exception value is raised."""

    def __init__(self, verdicts: dict, *, delays: dict | None = None):
        self._verdicts = verdicts
        self._delays = delays or {}
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def ensure_configured(self) -> None:
        return None

    def compare(self, probe: str, reference: str) -> FaceVerdict:
        handle = reference.rsplit(",", 1)[1]
        with self._lock:
            self.calls.append(handle)
        time.sleep(self._delays.get(handle, 0))
        verdict = self._verdicts[handle]
        if isinstance(verdict, Exception):
            raise verdict
        return verdict


def test_tie_goes_to_first_candidate_in_order():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-a": FaceVerdict(True, 85), "ref-b": FaceVerdict(True, 85)})

    selection = MatchSelector(oracle, StubResolver()).select_best(PROBE, [a, b])
    assert selection.best.identity == a

    selection = MatchSelector(oracle, StubResolver()).select_best(PROBE, [b, a])
    assert selection.best.identity == b


def test_highest_matching_confidence_wins_and_non_matches_are_ignored():
    a, b, c = make_identity("a"), make_identity("b"), make_identity("c")
    oracle = StubOracle(
        {
            "ref-a": FaceVerdict(True, 72),
            "ref-b": FaceVerdict(False, 99),
            "ref-c": FaceVerdict(True, 88),
        }
    )

    selection = MatchSelector(oracle, StubResolver()).select_best(PROBE, [a, b, c])

    assert selection.best.identity == c
    assert selection.confidence == 88
    assert selection.compared == 3
    assert selection.skipped == 0


def test_no_matching_result_means_no_best_match():
    a = make_identity("a")
    oracle = StubOracle({"ref-a": FaceVerdict(False, 95)})

    selection = MatchSelector(oracle, StubResolver()).select_best(PROBE, [a])

    assert selection.best is None
    assert selection.confidence == 0.0


def test_unresolvable_reference_is_skipped_without_calling_oracle():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-b": FaceVerdict(True, 90)})

    selection = MatchSelector(oracle, StubResolver(broken={"ref-a"})).select_best(PROBE, [a, b])

    assert selection.best.identity == b
    assert selection.skipped == 1
    assert oracle.calls == ["ref-b"]


def test_failed_comparison_is_skipped():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-a": ComparisonError("timeout"), "ref-b": FaceVerdict(True, 75)})

    selection = MatchSelector(oracle, StubResolver()).select_best(PROBE, [a, b])

    assert selection.best.identity == b
    assert selection.compared == 1
    assert selection.skipped == 1


def test_every_candidate_failing_degrades_to_no_match():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-b": ComparisonError("bad json")})

    selection = MatchSelector(oracle, StubResolver(broken={"ref-a"})).select_best(PROBE, [a, b])

    assert selection.best is None
    assert selection.skipped == 2


def test_pooled_scan_folds_in_candidate_order_regardless_of_completion_order():
    a, b, c = make_identity("a"), make_identity("b"), make_identity("c")
    # a finishes last but is first in candidate order, so it must win the tie with c.
    oracle = StubOracle(
        {
            "ref-a": FaceVerdict(True, 80),
            "ref-b": FaceVerdict(True, 60),
            "ref-c": FaceVerdict(True, 80),
        },
        delays={"ref-a": 0.05},
    )

    selection = MatchSelector(oracle, StubResolver(), strategy=PooledScanStrategy(3)).select_best(PROBE, [a, b, c])

    assert selection.best.identity == a
    assert sorted(oracle.calls) == ["ref-a", "ref-b", "ref-c"]


def test_fold_best_uses_strict_inequality():
    a, b = make_identity("a"), make_identity("b")
    results = [
        None,
        ComparisonResult(identity=a, match=True, confidence=70.5),
        ComparisonResult(identity=b, match=True, confidence=70.5),
    ]

    assert fold_best(results).identity == a
    assert fold_best([]) is None


class ExplodingResolver(StubResolver):
    def __init__(self, exploding: dict):
        super().__init__()
        self._exploding = exploding

    def resolve(self, handle):
        if handle in self._exploding:
            raise self._exploding[handle]
        return super().resolve(handle)


def test_unexpected_resolver_error_skips_only_that_candidate():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-b": FaceVerdict(True, 90)})
    resolver = ExplodingResolver({"ref-a": ValueError("embedded null byte")})

    selection = MatchSelector(oracle, resolver).select_best(PROBE, [a, b])

    assert selection.best.identity == b
    assert selection.skipped == 1
    assert oracle.calls == ["ref-b"]


def test_unexpected_oracle_error_skips_only_that_candidate_on_the_pool():
    a, b = make_identity("a"), make_identity("b")
    oracle = StubOracle({"ref-a": RuntimeError("boom"), "ref-b": FaceVerdict(True, 90)})

    selection = MatchSelector(oracle, StubResolver(), strategy=PooledScanStrategy(2)).select_best(PROBE, [a, b])

    assert selection.best.identity == b
    assert selection.compared == 1
    assert selection.skipped == 1


def test_oversized_local_reference_image_is_skipped(tmp_path, monkeypatch):
    Image.new("RGB", (64, 64)).save(tmp_path / "a.png")
    (tmp_path / "b.jpg").write_bytes(b"\xff\xd8\xff\xe0 reference")
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    a = Identity(user_id="a", full_name="Student a", enrollment_number=None, roll_number=None, face_image_url="a.png")
    b = Identity(user_id="b", full_name="Student b", enrollment_number=None, roll_number=None, face_image_url="b.jpg")
    resolver = StorageImageResolver(StorageConfig(root=str(tmp_path)))

    class AlwaysMatchOracle:
        def ensure_configured(self):
            return None

        def compare(self, probe, reference):
            return FaceVerdict(True, 90)

    selection = MatchSelector(AlwaysMatchOracle(), resolver).select_best(PROBE, [a, b])

    assert selection.best.identity == b
    assert selection.skipped == 1
