import os

from . import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_presence"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")

# Office network admission. Fail-open with no configured networks is a dev convenience only.
IP_VALIDATION_ENABLED = env_flag("IP_VALIDATION_ENABLED", "1")
NETWORK_FAIL_OPEN = env_flag("NETWORK_FAIL_OPEN", "1")
ALLOW_LOOPBACK_IP = env_flag("ALLOW_LOOPBACK_IP", "1")
TRUST_PROXY = env_flag("TRUST_PROXY", "0")

# Equal start/end means check-in/out is allowed at any time of day.
ADMISSION_WINDOW_START = os.getenv("ADMISSION_WINDOW_START", "00:00")
ADMISSION_WINDOW_END = os.getenv("ADMISSION_WINDOW_END", "00:00")

DEFAULT_CHECK_IN = os.getenv("DEFAULT_CHECK_IN", "09:00")
DEFAULT_CHECK_OUT = os.getenv("DEFAULT_CHECK_OUT", "18:00")
DEFAULT_GRACE_MINUTES = int(os.getenv("DEFAULT_GRACE_MINUTES", "30"))
