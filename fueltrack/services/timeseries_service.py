"""
Time-series derivation for refueling records.

Turns an unordered record set into the chronological sequence of
DerivedPoints, each carrying the distance and efficiency since its
immediate predecessor. Pure: no I/O, no shared state.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List

from ..calculations.constants import EFFICIENCY_DECIMALS
from ..calculations.efficiency import calculate_distance_delta, calculate_efficiency
from ..models import FuelRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedPoint:
    """A FuelRecord plus distance/efficiency relative to its predecessor."""

    record: FuelRecord
    distance_since_last: float = 0.0
    efficiency_since_last: float = 0.0

    @property
    def date(self) -> date:
        return self.record.date

    @property
    def gallons(self) -> float:
        return self.record.gallons

    @property
    def total_cost(self) -> float:
        return self.record.total_cost

    @property
    def price_per_gallon(self) -> float:
        return self.record.price_per_gallon

    @property
    def has_efficiency(self) -> bool:
        return self.efficiency_since_last > 0

    def to_dict(self) -> Dict[str, Any]:
        data = self.record.to_dict()
        data['distanceSinceLast'] = self.distance_since_last
        data['efficiencySinceLast'] = round(self.efficiency_since_last, EFFICIENCY_DECIMALS)
        return data


def sort_records(records: Iterable[FuelRecord]) -> List[FuelRecord]:
    """Sort records ascending by date; equal dates keep their input order."""
    return sorted(records, key=lambda r: r.date)


def derive_points(records: Iterable[FuelRecord]) -> List[DerivedPoint]:
    """
    Build the chronological derived sequence in a single pass.

    The first point has no predecessor and gets zero distance and
    efficiency. A non-positive odometer delta is treated as zero distance;
    efficiency is only set when both distance and gallons are positive.

    Args:
        records: Refueling records in any order

    Returns:
        DerivedPoints sorted by date, one per input record
    """
    ordered = sort_records(records)
    points: List[DerivedPoint] = []

    for index, record in enumerate(ordered):
        if index == 0:
            points.append(DerivedPoint(record=record))
            continue

        previous = ordered[index - 1]
        distance = calculate_distance_delta(previous.odometer, record.odometer)
        if distance == 0:
            logger.debug(
                f"Non-positive odometer delta for record {record.id} "
                f"({previous.odometer} -> {record.odometer}), excluded from efficiency"
            )

        points.append(DerivedPoint(
            record=record,
            distance_since_last=distance,
            efficiency_since_last=calculate_efficiency(distance, record.gallons),
        ))

    return points
