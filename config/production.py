import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "face_attendance"),
}

ORACLE_URL = os.getenv("ORACLE_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
ORACLE_API_KEY = os.getenv("ORACLE_API_KEY")
ORACLE_MODEL = os.getenv("ORACLE_MODEL", "google/gemini-2.5-flash")
ORACLE_TIMEOUT_SECONDS = float(os.getenv("ORACLE_TIMEOUT_SECONDS", "30"))

STORAGE_ROOT = os.getenv("STORAGE_ROOT")
STORAGE_SERVICE_KEY = os.getenv("STORAGE_SERVICE_KEY")
STORAGE_TIMEOUT_SECONDS = float(os.getenv("STORAGE_TIMEOUT_SECONDS", "10"))

CONFIDENCE_THRESHOLD = float(os.getenv("CONFIDENCE_THRESHOLD", "70"))
MAX_ORACLE_WORKERS = int(os.getenv("MAX_ORACLE_WORKERS", "4"))
RECORD_FAILED_ATTEMPTS = bool(int(os.getenv("RECORD_FAILED_ATTEMPTS", "0")))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "face_scan_attendance.log")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
