"""
Calculation Constants for FuelTrack

Centralized location for the constants used by the statistics engine.
Values that operators may want to tune come from Config.
"""

from ..config import Config

# Window Constants
LAST_7_DAYS = 7  # Width of the "last7days" window
LAST_30_DAYS = 30  # Width of the "last30days" window
LAST_6_MONTHS_DAYS = 180  # Width of the "last6months" window

# Bucketing Constants
DAILY_BUCKET_MAX_DAYS = Config.DAILY_BUCKET_MAX_DAYS  # Explicit ranges up to this width get daily buckets

# Trend Constants
TREND_THRESHOLD_FRACTION = 0.05  # +/-5% of the previous average
ADVICE_SUBWINDOW_MAX = 3  # Max intervals in the recent/previous comparison windows
MIN_RECORDS_FOR_ADVICE = 2  # Need at least one interval

# Rounding Constants (presentation only)
MONEY_DECIMALS = 2
EFFICIENCY_DECIMALS = 2
VOLUME_DECIMALS = 2
