"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

# Night premium window 22:30-06:30, as minute ranges over a two-day axis.
NIGHT_WINDOWS = (
    (0, 6 * 60 + 30),
    (22 * 60 + 30, MINUTES_PER_DAY),
    (MINUTES_PER_DAY, MINUTES_PER_DAY + 6 * 60 + 30),
)
NIGHT_PREMIUM_RATE = 0.3

CAPACITY_WARNING_RATIO = 0.2
WEEKLY_HOURS_WARNING_RATIO = 0.9

DEFAULT_SWEEP_BATCH_SIZE = 500
