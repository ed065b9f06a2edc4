"""
Efficiency Calculations

Handles distance-per-volume metrics between consecutive refuels:
- Odometer deltas (with rollback protection)
- Distance per gallon
- Gallons-weighted average efficiency
"""

from typing import Iterable, Optional, Tuple


def calculate_distance_delta(
    previous_odometer: Optional[float],
    current_odometer: Optional[float]
) -> float:
    """
    Calculate distance traveled between two odometer readings.

    A non-positive delta means an odometer reset, rollback or data-entry
    error and is reported as zero distance.

    Args:
        previous_odometer: Odometer at the previous refuel
        current_odometer: Odometer at this refuel

    Returns:
        Distance traveled, or 0.0 if unknown or not positive

    Examples:
        >>> calculate_distance_delta(1000, 1300)
        300
        >>> calculate_distance_delta(1300, 1000)  # Rollback
        0.0
        >>> calculate_distance_delta(None, 1000)
        0.0
    """
    if previous_odometer is None or current_odometer is None:
        return 0.0

    distance = current_odometer - previous_odometer
    if distance <= 0:
        return 0.0

    return distance


def calculate_efficiency(distance: float, gallons: float) -> float:
    """
    Calculate distance per gallon for one refuel interval.

    Args:
        distance: Distance since the previous refuel
        gallons: Volume added at this refuel

    Returns:
        Efficiency, or 0.0 when either operand is not positive
        (0.0 means "exclude from efficiency aggregates")

    Examples:
        >>> calculate_efficiency(300, 12)
        25.0
        >>> calculate_efficiency(0, 12)
        0.0
        >>> calculate_efficiency(300, 0)
        0.0
    """
    if distance is None or gallons is None:
        return 0.0

    if distance <= 0 or gallons <= 0:
        return 0.0

    return distance / gallons


def is_valid_efficiency(efficiency: Optional[float]) -> bool:
    """Return True if an efficiency value should count toward aggregates."""
    return efficiency is not None and efficiency > 0


def calculate_weighted_efficiency(samples: Iterable[Tuple[float, float]]) -> float:
    """
    Calculate gallons-weighted average efficiency.

    Large fill-ups influence the result in proportion to the volume
    consumed. Samples without a valid efficiency are skipped.

    Args:
        samples: (efficiency, gallons) pairs

    Returns:
        sum(efficiency * gallons) / sum(gallons), or 0.0 if no valid samples

    Examples:
        >>> calculate_weighted_efficiency([(20.0, 10.0), (30.0, 30.0)])
        27.5
        >>> calculate_weighted_efficiency([(0.0, 10.0)])
        0.0
    """
    weighted_sum = 0.0
    weight_total = 0.0

    for efficiency, gallons in samples:
        if not is_valid_efficiency(efficiency):
            continue
        weighted_sum += efficiency * gallons
        weight_total += gallons

    if weight_total <= 0:
        return 0.0

    return weighted_sum / weight_total
