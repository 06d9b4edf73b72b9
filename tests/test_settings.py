from __future__ import annotations

import importlib
from types import SimpleNamespace

from config import get_settings_module

from src.face_scan_attendance.face_scan_attendance.settings import AppSettings


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "TEST")
    assert get_settings_module() == "config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_app_settings_from_testing_module():
    settings = AppSettings.from_module(importlib.import_module("config.testing"))

    assert settings.db.database == "face_attendance_test"
    assert settings.oracle.api_key == "test-key"
    assert settings.oracle.timeout_seconds == 1.0
    assert settings.storage.root is None
    assert settings.checkpoint.confidence_threshold == 70.0
    assert settings.checkpoint.max_oracle_workers == 1
    assert settings.checkpoint.record_failed_attempts is False
    assert settings.auto_init_db is False


def test_blank_values_fall_back_to_defaults():
    module = SimpleNamespace(
        DB_CONFIG={"host": "db", "user": "app", "password": "pw", "database": "att"},
        ORACLE_API_KEY="",
        STORAGE_ROOT="",
    )

    settings = AppSettings.from_module(module)

    assert settings.db.port == 3306
    assert settings.oracle.api_key is None
    assert settings.storage.root is None
    assert settings.checkpoint.confidence_threshold == 70.0
    assert settings.debug is False
