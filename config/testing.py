import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "face_attendance_test"),
}

ORACLE_URL = "http://oracle.invalid/v1/chat/completions"
ORACLE_API_KEY = "test-key"
ORACLE_MODEL = "test-model"
ORACLE_TIMEOUT_SECONDS = 1.0

STORAGE_ROOT = None
STORAGE_SERVICE_KEY = None
STORAGE_TIMEOUT_SECONDS = 1.0

CONFIDENCE_THRESHOLD = 70.0
MAX_ORACLE_WORKERS = 1
RECORD_FAILED_ATTEMPTS = False

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_FILE = None

AUTO_INIT_DB = False
