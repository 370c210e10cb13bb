"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_API_PREFIX = "/api"
SESSION_COOKIE_NAME = "tender_session"
SESSION_ID_BYTES = 32

LOG_LINE_LIMIT = 120

# Calendar status thresholds, in whole days until submission.
URGENT_WITHIN_DAYS = 1
WARNING_WITHIN_DAYS = 3
UPCOMING_WITHIN_DAYS = 7

# Dashboard summary: submissions due within this many days count as urgent.
SUMMARY_URGENT_DAYS = 3
SUMMARY_UPCOMING_LIMIT = 5

# Admin form rules (checked client-side before sending).
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8
