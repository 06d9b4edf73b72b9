from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Optional

from .core.constants import (
    CONFIDENCE_THRESHOLD,
    DEFAULT_MAX_ORACLE_WORKERS,
    DEFAULT_ORACLE_MODEL,
    DEFAULT_ORACLE_TIMEOUT_SECONDS,
    DEFAULT_ORACLE_URL,
    DEFAULT_STORAGE_TIMEOUT_SECONDS,
)
from .database.connection import DBConfig
from .recognition.gateway_oracle import OracleConfig
from .recognition.reference_images import StorageConfig


@dataclass(frozen=True)
class CheckpointSettings:
    """Business policy knobs for the face scan checkpoint.

    `confidence_threshold` is exclusive: a match must score strictly above it.
    """

    confidence_threshold: float = CONFIDENCE_THRESHOLD
    max_oracle_workers: int = DEFAULT_MAX_ORACLE_WORKERS
    record_failed_attempts: bool = False


@dataclass(frozen=True)
class AppSettings:
    db: DBConfig
    oracle: OracleConfig = field(default_factory=OracleConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    checkpoint: CheckpointSettings = field(default_factory=CheckpointSettings)
    debug: bool = False
    auto_init_db: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AppSettings":
        """Build settings from one of the `config.*` settings modules."""
        return cls(
            db=DBConfig.from_dict(getattr(settings, "DB_CONFIG")),
            oracle=OracleConfig(
                url=getattr(settings, "ORACLE_URL", DEFAULT_ORACLE_URL),
                api_key=getattr(settings, "ORACLE_API_KEY", None) or None,
                model=getattr(settings, "ORACLE_MODEL", DEFAULT_ORACLE_MODEL),
                timeout_seconds=float(getattr(settings, "ORACLE_TIMEOUT_SECONDS", DEFAULT_ORACLE_TIMEOUT_SECONDS)),
            ),
            storage=StorageConfig(
                root=getattr(settings, "STORAGE_ROOT", None) or None,
                service_key=getattr(settings, "STORAGE_SERVICE_KEY", None) or None,
                timeout_seconds=float(getattr(settings, "STORAGE_TIMEOUT_SECONDS", DEFAULT_STORAGE_TIMEOUT_SECONDS)),
            ),
            checkpoint=CheckpointSettings(
                confidence_threshold=float(getattr(settings, "CONFIDENCE_THRESHOLD", CONFIDENCE_THRESHOLD)),
                max_oracle_workers=int(getattr(settings, "MAX_ORACLE_WORKERS", DEFAULT_MAX_ORACLE_WORKERS)),
                record_failed_attempts=bool(getattr(settings, "RECORD_FAILED_ATTEMPTS", False)),
            ),
            debug=bool(getattr(settings, "DEBUG", False)),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
            log_file=getattr(settings, "LOG_FILE", None) or None,
        )
