from __future__ import annotations

import threading
from typing import Optional

import requests


class ThreadLocalSession:
    """One `requests.Session` per thread, so pooled scans never share a connection pool.

    An explicitly supplied session is returned as-is to every thread.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._shared = session
        self._local = threading.local()

    def get(self) -> requests.Session:
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session
