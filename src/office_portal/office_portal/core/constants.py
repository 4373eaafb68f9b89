"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_TEXT_LENGTH = 255
UPCOMING_EVENT_DAYS = 7
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

# Largest value a SQLite INTEGER column can hold.
MAX_SQLITE_INTEGER = 2**63 - 1
