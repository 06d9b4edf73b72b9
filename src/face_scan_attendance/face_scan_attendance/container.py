from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import FaceScanAttendanceService
from .database.connection import DatabaseConnection
from .identities.mysql_identity_repository import MySQLCandidateRepository
from .recognition.factory import ScanStrategyFactory
from .recognition.gateway_oracle import GatewaySimilarityOracle
from .recognition.reference_images import StorageImageResolver
from .recognition.selector import MatchSelector
from .settings import AppSettings


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    candidates_repo: MySQLCandidateRepository
    attendance_repo: MySQLAttendanceRepository

    oracle: GatewaySimilarityOracle
    image_resolver: StorageImageResolver
    match_selector: MatchSelector

    face_scan_service: FaceScanAttendanceService


def build_container(*, settings: AppSettings) -> Container:
    conn = DatabaseConnection.get_instance(settings.db)

    candidates_repo = MySQLCandidateRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    oracle = GatewaySimilarityOracle(settings.oracle)
    image_resolver = StorageImageResolver(settings.storage)
    match_selector = MatchSelector(
        oracle,
        image_resolver,
        strategy=ScanStrategyFactory().for_workers(settings.checkpoint.max_oracle_workers),
    )

    face_scan_service = FaceScanAttendanceService(
        candidates_repo,
        attendance_repo,
        match_selector,
        settings=settings.checkpoint,
    )

    return Container(
        conn=conn,
        candidates_repo=candidates_repo,
        attendance_repo=attendance_repo,
        oracle=oracle,
        image_resolver=image_resolver,
        match_selector=match_selector,
        face_scan_service=face_scan_service,
    )
