"""Helpers for moving face images around as `data:` URLs."""

from __future__ import annotations

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from ..core.constants import DEFAULT_IMAGE_MIME
from ..core.exceptions import ValidationError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<b64>;base64)?,(?P<payload>.*)$", re.DOTALL)


def is_data_url(value: str) -> bool:
    return value.startswith("data:")


def sniff_mime_type(data: bytes) -> str:
    """Detect the image MIME type from its bytes, falling back to JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return DEFAULT_IMAGE_MIME
    return mime or DEFAULT_IMAGE_MIME


def to_data_url(data: bytes, *, mime_type: str | None = None) -> str:
    mime = mime_type or sniff_mime_type(data)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def decode_data_url(value: str) -> tuple[str, bytes]:
    """Split a base64 `data:` URL into (mime type, raw bytes)."""
    m = _DATA_URL_RE.match(value.strip())
    if not m or not m.group("b64"):
        raise ValidationError("Image must be a base64 data URL")
    try:
        raw = base64.b64decode(m.group("payload"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Image data URL is not valid base64") from e
    if not raw:
        raise ValidationError("Image data URL is empty")
    return m.group("mime") or DEFAULT_IMAGE_MIME, raw
