"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CONFIDENCE_THRESHOLD = 70.0
MIN_CONFIDENCE = 0.0
MAX_CONFIDENCE = 100.0

DEFAULT_ORACLE_TIMEOUT_SECONDS = 30.0
DEFAULT_STORAGE_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_ORACLE_WORKERS = 1

DEFAULT_ORACLE_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_ORACLE_MODEL = "google/gemini-2.5-flash"

UNKNOWN_ENROLLMENT = "N/A"
DEFAULT_IMAGE_MIME = "image/jpeg"

MYSQL_DUPLICATE_KEY_ERRNO = 1062
