"""
Financial Calculations

Handles fuel spend metrics:
- Total cost of a refuel
- Cost per distance unit
"""

from .constants import MONEY_DECIMALS


def calculate_fuel_cost(
    gallons: float,
    price_per_gallon: float
) -> float:
    """
    Calculate the conventional total cost of a refuel.

    Args:
        gallons: Volume added
        price_per_gallon: Unit price

    Returns:
        gallons * price rounded to cents

    Examples:
        >>> calculate_fuel_cost(10.0, 3.00)
        30.0
        >>> calculate_fuel_cost(12.0, 3.20)
        38.4
    """
    return round(gallons * price_per_gallon, MONEY_DECIMALS)


def calculate_cost_per_distance(
    total_cost: float,
    total_distance: float
) -> float:
    """
    Calculate spend per distance unit.

    Args:
        total_cost: Total spend over the period
        total_distance: Valid distance driven over the period

    Returns:
        Cost per distance unit, 0.0 when no distance was recorded

    Examples:
        >>> round(calculate_cost_per_distance(68.40, 300), 3)
        0.228
        >>> calculate_cost_per_distance(68.40, 0)
        0.0
    """
    if not total_distance or total_distance <= 0:
        return 0.0

    return total_cost / total_distance
