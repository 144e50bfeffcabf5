"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_TIMEZONE = "Eastern Time (US & Canada)"
DEFAULT_TIMEZONE_LABEL = f"{DEFAULT_TIMEZONE} (Default)"
DEFAULT_CHECK_IN_VIEW = "card"
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
POSITION_RATING_MIN = -3
POSITION_RATING_MAX = 3
