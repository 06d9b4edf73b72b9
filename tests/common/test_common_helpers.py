from __future__ import annotations

import io
import threading
from datetime import datetime

import pytest
import requests
from PIL import Image

from src.face_scan_attendance.face_scan_attendance.common.datetime_utils import day_bounds
from src.face_scan_attendance.face_scan_attendance.common.http import ThreadLocalSession
from src.face_scan_attendance.face_scan_attendance.common.images import decode_data_url, sniff_mime_type, to_data_url
from src.face_scan_attendance.face_scan_attendance.core.exceptions import ValidationError


def test_decode_data_url():
    mime, raw = decode_data_url("data:image/webp;base64,aGVsbG8=")

    assert mime == "image/webp"
    assert raw == b"hello"


@pytest.mark.parametrize(
    "value",
    [
        "data:image/png,plain-text-payload",
        "data:image/png;base64,",
        "data:image/png;base64,***",
        "https://example.com/face.jpg",
    ],
)
def test_decode_rejects_non_base64_data_urls(value):
    with pytest.raises(ValidationError):
        decode_data_url(value)


def test_sniff_mime_type_reads_image_format():
    buf = io.BytesIO()
    Image.new("L", (1, 1)).save(buf, format="GIF")

    assert sniff_mime_type(buf.getvalue()) == "image/gif"
    assert sniff_mime_type(b"not an image") == "image/jpeg"


def test_to_data_url_prefers_explicit_mime():
    assert to_data_url(b"hi", mime_type="image/png") == "data:image/png;base64,aGk="


def test_day_bounds_is_local_midnight_to_midnight():
    start, end = day_bounds(datetime(2026, 3, 1, 23, 59, 59))

    assert start == datetime(2026, 3, 1)
    assert end == datetime(2026, 3, 2)


def test_each_thread_gets_its_own_session():
    sessions = ThreadLocalSession()
    seen = []

    def worker():
        seen.append((sessions.get(), sessions.get()))

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    (a1, a2), (b1, b2) = seen
    assert isinstance(a1, requests.Session)
    assert a1 is a2
    assert b1 is b2
    assert a1 is not b1


def test_supplied_session_is_shared_by_all_threads():
    shared = requests.Session()
    sessions = ThreadLocalSession(shared)
    seen = []

    t = threading.Thread(target=lambda: seen.append(sessions.get()))
    t.start()
    t.join()

    assert seen == [shared]
    assert sessions.get() is shared
