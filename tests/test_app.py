from __future__ import annotations

import pytest

from src.face_scan_attendance.face_scan_attendance.main import create_app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_scan_without_image_is_rejected_before_touching_the_database(client):
    res = client.post("/api/face-scan-attendance", json={})

    assert res.status_code == 400
    assert res.get_json()["reason"] == "no_image"
