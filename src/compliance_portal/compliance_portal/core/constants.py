"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

DEFAULT_COUNT_PER_TITLE = 4
MAX_COUNT_PER_TITLE = 12

# First occurrence lands this many days after the reference date.
FIRST_OFFSET_MIN_DAYS = 10
FIRST_OFFSET_MAX_DAYS = 40

REPEAT_EVERY_MONTHS = 3
REPEAT_JITTER_DAYS = 3

TRAINING_OCCURRENCES = 4
TRAINING_MONTH_JITTER = 1
TRAINING_DAY_JITTER = 5

NOTIFICATION_TITLE = "Legal document expiry"
DEFAULT_FEED_LIMIT = 50

# Fallback holiday list for the training calendar when a caller passes none.
DEFAULT_HOLIDAYS = (
    "2026-01-26",
    "2026-03-14",
    "2026-08-15",
    "2026-10-02",
    "2026-11-12",
    "2026-12-25",
)
