import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_presence_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

IP_VALIDATION_ENABLED = True
NETWORK_FAIL_OPEN = False
ALLOW_LOOPBACK_IP = False
TRUST_PROXY = False

ADMISSION_WINDOW_START = "00:00"
ADMISSION_WINDOW_END = "00:00"

DEFAULT_CHECK_IN = "09:00"
DEFAULT_CHECK_OUT = "18:00"
DEFAULT_GRACE_MINUTES = 30
