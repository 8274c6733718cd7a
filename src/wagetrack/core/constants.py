"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_TOP_EARNERS = 5
WEEKLY_WINDOW_DAYS = 7
MIN_PASSWORD_LENGTH = 6
UNKNOWN_EMPLOYEE_LABEL = "Unknown/Deleted"
