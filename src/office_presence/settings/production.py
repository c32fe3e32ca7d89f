import os

from . import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_presence"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")

IP_VALIDATION_ENABLED = env_flag("IP_VALIDATION_ENABLED", "1")
NETWORK_FAIL_OPEN = env_flag("NETWORK_FAIL_OPEN", "0")
ALLOW_LOOPBACK_IP = env_flag("ALLOW_LOOPBACK_IP", "0")
TRUST_PROXY = env_flag("TRUST_PROXY", "1")

ADMISSION_WINDOW_START = os.getenv("ADMISSION_WINDOW_START", "06:00")
ADMISSION_WINDOW_END = os.getenv("ADMISSION_WINDOW_END", "22:00")

DEFAULT_CHECK_IN = os.getenv("DEFAULT_CHECK_IN", "09:00")
DEFAULT_CHECK_OUT = os.getenv("DEFAULT_CHECK_OUT", "18:00")
DEFAULT_GRACE_MINUTES = int(os.getenv("DEFAULT_GRACE_MINUTES", "30"))
