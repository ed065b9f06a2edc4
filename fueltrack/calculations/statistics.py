"""
Statistical Calculations

Handles the small statistics behind summaries and the advice summary:
- Means
- Percent change
- Trend classification (improving / worsening / stable)
"""

from typing import List, Optional

from .constants import TREND_THRESHOLD_FRACTION

TREND_IMPROVING = "improving"
TREND_WORSENING = "worsening"
TREND_STABLE = "stable"


def calculate_mean(values: List[float]) -> float:
    """
    Calculate the arithmetic mean, 0.0 for an empty list.

    Examples:
        >>> calculate_mean([24.0, 26.0])
        25.0
        >>> calculate_mean([])
        0.0
    """
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_percent_change(
    new_value: float,
    old_value: float
) -> Optional[float]:
    """
    Calculate percentage change between two values.

    Args:
        new_value: New/current value
        old_value: Old/previous value

    Returns:
        Percentage change, or None if old_value is zero

    Examples:
        >>> calculate_percent_change(110, 100)
        10.0
        >>> calculate_percent_change(90, 100)
        -10.0
        >>> calculate_percent_change(100, 0)
        None
    """
    if old_value == 0:
        return None

    change = ((new_value - old_value) / old_value) * 100
    return round(change, 1)


def classify_trend(
    recent_value: float,
    previous_value: float,
    threshold_fraction: float = TREND_THRESHOLD_FRACTION
) -> str:
    """
    Classify an efficiency change as improving, worsening or stable.

    The change counts only when it exceeds threshold_fraction of the
    previous value. Higher efficiency is better.

    Examples:
        >>> classify_trend(27.0, 25.0)
        'improving'
        >>> classify_trend(23.0, 25.0)
        'worsening'
        >>> classify_trend(25.5, 25.0)
        'stable'
    """
    diff = recent_value - previous_value
    threshold = previous_value * threshold_fraction

    if diff > threshold:
        return TREND_IMPROVING
    if diff < -threshold:
        return TREND_WORSENING
    return TREND_STABLE
