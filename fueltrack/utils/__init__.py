"""Utility modules for FuelTrack."""

from .time_utils import (
    days_between,
    format_date_iso,
    local_today,
    month_start,
    parse_date,
)
from .formatting import (
    format_currency,
    normalize_language,
    round_money,
)

__all__ = [
    'days_between',
    'format_date_iso',
    'local_today',
    'month_start',
    'parse_date',
    'format_currency',
    'normalize_language',
    'round_money',
]
