"""
Range aggregation over the derived refueling sequence.

Given the chronological DerivedPoints, a reporting window and the selected
chart metrics, computes:
- Summary statistics (total cost, weighted efficiency, cost per distance)
- A bucketed cost-or-volume series (daily or monthly buckets)
- A price-or-efficiency trend series

Everything here is a pure function of its arguments; "today" is passed in
explicitly (defaulting to the local calendar day) so results are
reproducible.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..calculations.constants import (
    DAILY_BUCKET_MAX_DAYS,
    EFFICIENCY_DECIMALS,
    LAST_6_MONTHS_DAYS,
    LAST_7_DAYS,
    LAST_30_DAYS,
    VOLUME_DECIMALS,
)
from ..calculations.efficiency import calculate_weighted_efficiency
from ..calculations.financial import calculate_cost_per_distance
from ..models import FuelRecord
from ..utils.formatting import (
    format_day_label,
    format_month_label,
    format_trend_label,
    round_money,
)
from ..utils.time_utils import days_between, format_date_iso, local_today, month_start, parse_date
from .timeseries_service import DerivedPoint, derive_points

logger = logging.getLogger(__name__)


class WindowKind(str, Enum):
    """Reporting windows offered by the dashboard."""

    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    LAST_6_MONTHS = "last6months"
    CURRENT_CALENDAR_YEAR = "currentCalendarYear"
    ALL_TIME = "allTime"
    EXPLICIT_RANGE = "explicitRange"


class BarMetric(str, Enum):
    COST = "cost"
    VOLUME = "volume"


class TrendMetric(str, Enum):
    PRICE = "price"
    EFFICIENCY = "efficiency"


class Granularity(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


# Day-count windows: a record is included when 0 <= (today - date).days <= N
DAY_COUNT_WINDOWS = {
    WindowKind.LAST_7_DAYS: LAST_7_DAYS,
    WindowKind.LAST_30_DAYS: LAST_30_DAYS,
    WindowKind.LAST_6_MONTHS: LAST_6_MONTHS_DAYS,
}

# Range names used by the mobile UI
WINDOW_ALIASES = {
    "week": WindowKind.LAST_7_DAYS,
    "30d": WindowKind.LAST_30_DAYS,
    "6m": WindowKind.LAST_6_MONTHS,
    "year": WindowKind.CURRENT_CALENDAR_YEAR,
    "all": WindowKind.ALL_TIME,
    "custom": WindowKind.EXPLICIT_RANGE,
}


def _resolve_window_kind(name: Optional[str]) -> Optional[WindowKind]:
    if name is None:
        return None
    if name in WINDOW_ALIASES:
        return WINDOW_ALIASES[name]
    try:
        return WindowKind(name)
    except ValueError:
        return None


@dataclass(frozen=True)
class WindowSpec:
    """A preset reporting window or an inclusive explicit date range."""

    kind: WindowKind
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def preset(cls, name: str) -> "WindowSpec":
        """
        Build a preset window by name.

        Raises:
            ValueError: if name is unknown or names the explicit range
        """
        kind = _resolve_window_kind(name)
        if kind is None:
            raise ValueError(f"Unknown window: {name}")
        if kind == WindowKind.EXPLICIT_RANGE:
            raise ValueError("Explicit ranges need start and end dates; use explicit_range()")
        return cls(kind=kind)

    @classmethod
    def explicit_range(cls, start: date, end: date) -> "WindowSpec":
        return cls(kind=WindowKind.EXPLICIT_RANGE, start=start, end=end)

    @classmethod
    def parse(
        cls,
        name: Optional[str],
        start: Any = None,
        end: Any = None,
        today: Optional[date] = None,
        default: WindowKind = WindowKind.LAST_30_DAYS,
    ) -> "WindowSpec":
        """
        Build a window from request parameters, never raising.

        Unknown names fall back to default. An explicit range with a missing
        or unparseable bound defaults to the current month so far
        (first of the month through today).
        """
        kind = _resolve_window_kind(name)
        if kind is None:
            if name:
                logger.warning(f"Unknown window '{name}', using {default.value}")
            kind = default

        if kind != WindowKind.EXPLICIT_RANGE:
            return cls(kind=kind)

        today = today or local_today()
        start_date = parse_date(start, default=month_start(today))
        end_date = parse_date(end, default=today)
        return cls.explicit_range(start_date, end_date)

    def contains(self, day: date, today: date) -> bool:
        """Return True if a record dated day falls inside the window."""
        if self.kind == WindowKind.ALL_TIME:
            return True
        if self.kind == WindowKind.EXPLICIT_RANGE:
            return self.start <= day <= self.end
        if self.kind == WindowKind.CURRENT_CALENDAR_YEAR:
            return day.year == today.year

        age_days = days_between(day, today)
        return 0 <= age_days <= DAY_COUNT_WINDOWS[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "start": format_date_iso(self.start),
            "end": format_date_iso(self.end),
        }


@dataclass(frozen=True)
class RangeSummary:
    """Summary statistics over the filtered points, at full precision."""

    total_cost: float = 0.0
    total_distance: float = 0.0
    total_gallons: float = 0.0
    avg_consumption: float = 0.0
    avg_cost_per_unit: float = 0.0
    last_refuel_date: Optional[date] = None
    record_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": round_money(self.total_cost),
            "totalDistance": round(self.total_distance, 2),
            "totalGallons": round(self.total_gallons, VOLUME_DECIMALS),
            "avgConsumption": round(self.avg_consumption, EFFICIENCY_DECIMALS),
            "avgCostPerUnit": round(self.avg_cost_per_unit, 4),
            "lastRefuelDate": format_date_iso(self.last_refuel_date),
            "recordCount": self.record_count,
        }


@dataclass(frozen=True)
class Bucket:
    """Cost and volume accumulated over one day or one calendar month."""

    key: date
    label: str
    cost: float
    volume: float
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": format_date_iso(self.key),
            "name": self.label,
            "value": round(self.value, 2),
            "cost": round_money(self.cost),
            "volume": round(self.volume, VOLUME_DECIMALS),
        }


@dataclass(frozen=True)
class TrendPoint:
    """One price or efficiency sample for the trend chart."""

    date: date
    label: str
    value: float
    record_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": format_date_iso(self.date),
            "name": self.label,
            "value": round(self.value, EFFICIENCY_DECIMALS),
            "recordId": self.record_id,
        }


@dataclass(frozen=True)
class AggregateResult:
    window: WindowSpec
    granularity: Granularity
    bar_metric: BarMetric
    trend_metric: TrendMetric
    summary: RangeSummary
    buckets: List[Bucket] = field(default_factory=list)
    trend: List[TrendPoint] = field(default_factory=list)

    @property
    def is_daily_view(self) -> bool:
        return self.granularity == Granularity.DAILY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window": self.window.to_dict(),
            "granularity": self.granularity.value,
            "isDailyView": self.is_daily_view,
            "barMetric": self.bar_metric.value,
            "trendMetric": self.trend_metric.value,
            "stats": self.summary.to_dict(),
            "barChartData": [b.to_dict() for b in self.buckets],
            "trendChartData": [t.to_dict() for t in self.trend],
        }


def parse_bar_metric(value: Optional[str]) -> BarMetric:
    """Lenient request-parameter parsing; unknown values mean cost."""
    try:
        return BarMetric(value)
    except ValueError:
        return BarMetric.COST


def parse_trend_metric(value: Optional[str]) -> TrendMetric:
    """Lenient request-parameter parsing; unknown values mean price."""
    try:
        return TrendMetric(value)
    except ValueError:
        return TrendMetric.PRICE


def filter_points(
    points: Sequence[DerivedPoint],
    window: WindowSpec,
    today: Optional[date] = None,
) -> List[DerivedPoint]:
    """
    Keep the points inside window, preserving chronological order.

    Distances and efficiencies are not recomputed: each surviving point
    keeps the values computed against its true predecessor in the full
    sequence, even if that predecessor falls outside the window.
    """
    today = today or local_today()
    return [p for p in points if window.contains(p.date, today)]


def choose_granularity(window: WindowSpec) -> Granularity:
    """Daily buckets for short windows, monthly buckets otherwise."""
    if window.kind in (WindowKind.LAST_7_DAYS, WindowKind.LAST_30_DAYS):
        return Granularity.DAILY
    if window.kind == WindowKind.EXPLICIT_RANGE:
        if days_between(window.start, window.end) <= DAILY_BUCKET_MAX_DAYS:
            return Granularity.DAILY
    return Granularity.MONTHLY


def summarize(points: Sequence[DerivedPoint]) -> RangeSummary:
    """Compute summary statistics over already-filtered points."""
    if not points:
        return RangeSummary()

    total_cost = sum(p.total_cost for p in points)
    total_distance = sum(p.distance_since_last for p in points)
    total_gallons = sum(p.gallons for p in points)
    avg_consumption = calculate_weighted_efficiency(
        (p.efficiency_since_last, p.gallons) for p in points
    )

    return RangeSummary(
        total_cost=total_cost,
        total_distance=total_distance,
        total_gallons=total_gallons,
        avg_consumption=avg_consumption,
        avg_cost_per_unit=calculate_cost_per_distance(total_cost, total_distance),
        last_refuel_date=points[-1].date,
        record_count=len(points),
    )


def build_buckets(
    points: Sequence[DerivedPoint],
    granularity: Granularity,
    bar_metric: BarMetric = BarMetric.COST,
    language: str = "en",
) -> List[Bucket]:
    """Accumulate cost and volume per day or month, in chronological order."""
    totals: Dict[date, List[float]] = {}

    for point in points:
        if granularity == Granularity.DAILY:
            key = point.date
        else:
            key = month_start(point.date)
        cost_volume = totals.setdefault(key, [0.0, 0.0])
        cost_volume[0] += point.total_cost
        cost_volume[1] += point.gallons

    buckets = []
    for key in sorted(totals):
        cost, volume = totals[key]
        if granularity == Granularity.DAILY:
            label = format_day_label(key, language)
        else:
            label = format_month_label(key, language)
        buckets.append(Bucket(
            key=key,
            label=label,
            cost=cost,
            volume=volume,
            value=cost if bar_metric == BarMetric.COST else volume,
        ))

    return buckets


def build_trend(
    points: Sequence[DerivedPoint],
    trend_metric: TrendMetric = TrendMetric.PRICE,
    language: str = "en",
) -> List[TrendPoint]:
    """
    One trend point per filtered record.

    For efficiency, records without a valid efficiency (first record,
    zero or negative distance) are omitted rather than plotted as zero.
    """
    trend = []
    for point in points:
        if trend_metric == TrendMetric.EFFICIENCY:
            if not point.has_efficiency:
                continue
            value = point.efficiency_since_last
        else:
            value = point.price_per_gallon

        trend.append(TrendPoint(
            date=point.date,
            label=format_trend_label(point.date, language),
            value=value,
            record_id=point.record.id,
        ))

    return trend


def aggregate(
    points: Sequence[DerivedPoint],
    window: WindowSpec,
    bar_metric: BarMetric = BarMetric.COST,
    trend_metric: TrendMetric = TrendMetric.PRICE,
    today: Optional[date] = None,
    language: str = "en",
) -> AggregateResult:
    """
    Aggregate the derived sequence for one window and metric selection.

    Args:
        points: Chronological DerivedPoints from derive_points()
        window: Reporting window
        bar_metric: Metric accumulated into buckets (cost or volume)
        trend_metric: Metric plotted per record (price or efficiency)
        today: Reference day for relative windows (default: local today)
        language: Label language ("en" or "es")

    Returns:
        AggregateResult with summary, buckets and trend series
    """
    bar_metric = BarMetric(bar_metric)
    trend_metric = TrendMetric(trend_metric)
    today = today or local_today()

    filtered = filter_points(points, window, today)
    granularity = choose_granularity(window)

    return AggregateResult(
        window=window,
        granularity=granularity,
        bar_metric=bar_metric,
        trend_metric=trend_metric,
        summary=summarize(filtered),
        buckets=build_buckets(filtered, granularity, bar_metric, language),
        trend=build_trend(filtered, trend_metric, language),
    )


def aggregate_records(
    records: Iterable[FuelRecord],
    window: WindowSpec,
    bar_metric: BarMetric = BarMetric.COST,
    trend_metric: TrendMetric = TrendMetric.PRICE,
    today: Optional[date] = None,
    language: str = "en",
) -> AggregateResult:
    """Derive and aggregate in one call."""
    return aggregate(derive_points(records), window, bar_metric, trend_metric, today, language)
