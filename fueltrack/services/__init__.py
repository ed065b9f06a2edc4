"""
Services module for FuelTrack business logic.

This module contains the statistics engine and record store operations,
kept separate from the Flask route handlers.
"""

from .timeseries_service import (
    DerivedPoint,
    derive_points,
    sort_records,
)
from .aggregation_service import (
    AggregateResult,
    BarMetric,
    Granularity,
    TrendMetric,
    WindowKind,
    WindowSpec,
    aggregate,
    aggregate_records,
)
from .advice_service import (
    AdviceSummary,
    build_advice_summary,
)

__all__ = [
    # Time series
    'DerivedPoint',
    'derive_points',
    'sort_records',
    # Aggregation
    'AggregateResult',
    'BarMetric',
    'Granularity',
    'TrendMetric',
    'WindowKind',
    'WindowSpec',
    'aggregate',
    'aggregate_records',
    # Advice
    'AdviceSummary',
    'build_advice_summary',
]
