"""Centralized constants for leetsrs.

All scheduling numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Update engine ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_QUALITY = 5
MASTERY_INTERVAL_DAYS = 30
FIRST_REVIEW_DELAY_DAYS = 1

# SM-2 graduated policy
GRADUATED_SECOND_INTERVAL = 6

# ---------- Selection engine ----------
NEW_PROBLEMS_PER_DAY = 2
NEW_ATTEMPTS_PER_DAY = 2
REPEAT_ATTEMPTS_PER_DAY = 1

# ---------- Aggregation engine ----------
ROLLING_WINDOW_DAYS = 365
CYCLE_START_MONTH = 6  # June
CYCLE_START_DAY = 1
HEATMAP_DATE_FORMAT = "%Y-%m-%d"

# ---------- Storage ----------
EXPORT_SCHEMA_VERSION = 1
