"""
FuelTrack Calculation Module

Consolidated calculation utilities for efficiency, financial and
statistical metrics over refueling records.

Usage:
    from fueltrack.calculations import calculate_efficiency, classify_trend
    from fueltrack.calculations.constants import TREND_THRESHOLD_FRACTION
"""

# Efficiency calculations
from .efficiency import (
    calculate_distance_delta,
    calculate_efficiency,
    calculate_weighted_efficiency,
    is_valid_efficiency,
)

# Financial calculations
from .financial import (
    calculate_cost_per_distance,
    calculate_fuel_cost,
)

# Statistical calculations
from .statistics import (
    TREND_IMPROVING,
    TREND_STABLE,
    TREND_WORSENING,
    calculate_mean,
    calculate_percent_change,
    classify_trend,
)

# Constants (re-export for convenience)
from .constants import (
    ADVICE_SUBWINDOW_MAX,
    DAILY_BUCKET_MAX_DAYS,
    LAST_6_MONTHS_DAYS,
    LAST_7_DAYS,
    LAST_30_DAYS,
    TREND_THRESHOLD_FRACTION,
)

__all__ = [
    # Efficiency
    "calculate_distance_delta",
    "calculate_efficiency",
    "calculate_weighted_efficiency",
    "is_valid_efficiency",
    # Financial
    "calculate_fuel_cost",
    "calculate_cost_per_distance",
    # Statistics
    "calculate_mean",
    "calculate_percent_change",
    "classify_trend",
    "TREND_IMPROVING",
    "TREND_WORSENING",
    "TREND_STABLE",
    # Constants
    "LAST_7_DAYS",
    "LAST_30_DAYS",
    "LAST_6_MONTHS_DAYS",
    "DAILY_BUCKET_MAX_DAYS",
    "TREND_THRESHOLD_FRACTION",
    "ADVICE_SUBWINDOW_MAX",
]
