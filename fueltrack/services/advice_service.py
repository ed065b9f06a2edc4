"""
Advice summary for the generative-text collaborator.

The text service is given pre-computed numbers only, so it never has to do
arithmetic: historical efficiency, recent vs previous efficiency, a trend
label, and average vs current price.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from ..calculations.constants import (
    ADVICE_SUBWINDOW_MAX,
    EFFICIENCY_DECIMALS,
    MIN_RECORDS_FOR_ADVICE,
    MONEY_DECIMALS,
)
from ..calculations.statistics import TREND_STABLE, calculate_mean, classify_trend
from ..models import FuelRecord
from .timeseries_service import derive_points

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGES = {
    "es": "Necesito al menos 2 registros para calcular tendencias de consumo.",
    "en": "I need at least 2 records to calculate consumption trends.",
}


@dataclass(frozen=True)
class AdviceSummary:
    total_records: int
    avg_efficiency: float
    recent_avg_efficiency: float
    previous_avg_efficiency: float
    trend: str
    avg_price: float
    last_price: float
    first_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "avgEfficiency": round(self.avg_efficiency, EFFICIENCY_DECIMALS),
            "recentAvgEfficiency": round(self.recent_avg_efficiency, EFFICIENCY_DECIMALS),
            "previousAvgEfficiency": round(self.previous_avg_efficiency, EFFICIENCY_DECIMALS),
            "trend": self.trend,
            "avgPrice": round(self.avg_price, MONEY_DECIMALS),
            "lastPrice": self.last_price,
            "firstPrice": self.first_price,
        }


def calculate_subwindow_size(valid_points: int) -> int:
    """
    Size of the recent and previous comparison windows.

    Examples:
        >>> calculate_subwindow_size(8)
        3
        >>> calculate_subwindow_size(3)
        1
        >>> calculate_subwindow_size(1)
        0
    """
    return min(ADVICE_SUBWINDOW_MAX, valid_points // 2)


def build_advice_summary(records: Iterable[FuelRecord]) -> Optional[AdviceSummary]:
    """
    Summarize the full record history for the advice collaborator.

    Returns:
        AdviceSummary, or None when there is no valid efficiency interval
    """
    points = derive_points(records)
    if len(points) < MIN_RECORDS_FOR_ADVICE:
        return None

    intervals = [p for p in points if p.has_efficiency]
    if not intervals:
        logger.debug("No valid efficiency intervals, advice summary unavailable")
        return None

    total_distance = sum(p.distance_since_last for p in intervals)
    total_gallons = sum(p.gallons for p in intervals)
    avg_efficiency = total_distance / total_gallons
    avg_price = calculate_mean([p.price_per_gallon for p in points])

    window = calculate_subwindow_size(len(intervals))
    trend = TREND_STABLE
    recent_avg = 0.0
    previous_avg = 0.0

    if window > 0:
        efficiencies = [p.efficiency_since_last for p in intervals]
        recent = efficiencies[-window:]
        previous = efficiencies[-window * 2:-window]

        recent_avg = calculate_mean(recent)
        if previous:
            previous_avg = calculate_mean(previous)
            trend = classify_trend(recent_avg, previous_avg)

    return AdviceSummary(
        total_records=len(points),
        avg_efficiency=avg_efficiency,
        recent_avg_efficiency=recent_avg,
        previous_avg_efficiency=previous_avg,
        trend=trend,
        avg_price=avg_price,
        last_price=points[-1].price_per_gallon,
        first_price=points[0].price_per_gallon,
    )
