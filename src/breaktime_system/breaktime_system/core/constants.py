"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DAILY_BREAK_BUDGET_MINUTES = 70
DATE_FORMAT = "%Y-%m-%d"
