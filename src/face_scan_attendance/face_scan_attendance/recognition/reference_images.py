from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import requests

from ..common.http import ThreadLocalSession
from ..common.images import decode_data_url, is_data_url, to_data_url
from ..core.constants import DEFAULT_STORAGE_TIMEOUT_SECONDS
from ..core.exceptions import ReferenceImageError, ValidationError

logger = logging.getLogger(__name__)

PUBLIC_OBJECT_MARKER = "/storage/v1/object/public/"


class ReferenceImageResolver(Protocol):
    def resolve(self, handle: Optional[str]) -> str:
        """Turn a stored face image handle into a `data:` URL.

        Raises ReferenceImageError when the image cannot be fetched.
        """

        raise NotImplementedError


@dataclass(frozen=True)
class StorageConfig:
    root: Optional[str] = None
    service_key: Optional[str] = None
    timeout_seconds: float = DEFAULT_STORAGE_TIMEOUT_SECONDS


class StorageImageResolver(ReferenceImageResolver):
    """Resolves reference images from object storage URLs, inline data URLs or
    files under a local storage root."""

    def __init__(self, config: StorageConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._sessions = ThreadLocalSession(session)

    def resolve(self, handle: Optional[str]) -> str:
        if not handle or not handle.strip():
            raise ReferenceImageError("Profile has no face image")
        handle = handle.strip()

        if is_data_url(handle):
            try:
                decode_data_url(handle)
            except ValidationError as e:
                raise ReferenceImageError(str(e)) from e
            return handle

        if handle.startswith(("http://", "https://")):
            return self._download(handle)

        return self._read_local(handle)

    def _download_target(self, url: str) -> tuple[str, dict]:
        """Private-bucket download URL and headers when a service key is set.

        Public URL format: https://<host>/storage/v1/object/public/<bucket>/<path>
        """
        if not self._config.service_key or PUBLIC_OBJECT_MARKER not in url:
            return url, {}

        prefix, _, rest = url.partition(PUBLIC_OBJECT_MARKER)
        bucket, _, path = rest.partition("/")
        if not bucket or not path:
            raise ReferenceImageError(f"Invalid storage URL format: {url}")

        headers = {
            "Authorization": f"Bearer {self._config.service_key}",
            "apikey": self._config.service_key,
        }
        return f"{prefix}/storage/v1/object/{bucket}/{path}", headers

    def _download(self, url: str) -> str:
        target, headers = self._download_target(url)
        logger.debug("Downloading reference image %s", target)
        try:
            response = self._sessions.get().get(target, headers=headers, timeout=self._config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ReferenceImageError(f"Failed to download {url}: {e}") from e

        if not response.content:
            raise ReferenceImageError(f"Empty image at {url}")

        content_type = (response.headers.get("Content-Type") or "").split(";")[0].strip()
        mime = content_type if content_type.startswith("image/") else None
        return to_data_url(response.content, mime_type=mime)

    def _read_local(self, handle: str) -> str:
        if not self._config.root:
            raise ReferenceImageError(f"Unsupported image handle (no storage root): {handle}")

        root = Path(self._config.root).resolve()
        path = (root / handle).resolve()
        if root != path and root not in path.parents:
            raise ReferenceImageError(f"Image path escapes storage root: {handle}")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise ReferenceImageError(f"Failed to read {path}: {e}") from e
        if not data:
            raise ReferenceImageError(f"Empty image at {path}")
        return to_data_url(data)
