"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CHECK_IN_TIME = "09:00"
DEFAULT_CHECK_OUT_TIME = "18:00"
DEFAULT_GRACE_MINUTES = 30
MAX_GRACE_MINUTES = 120

HALF_DAY_THRESHOLD_MINUTES = 240

# Stored in place of a source IP when an admin checks someone in/out.
ADMIN_OVERRIDE_IP = "ADMIN_OVERRIDE"

DEFAULT_RECENT_LIMIT = 30
DEFAULT_LIST_LIMIT = 200
