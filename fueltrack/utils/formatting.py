"""
Presentation helpers: money rounding, currency strings and chart labels.

Aggregates are computed at full precision; these helpers are applied only
when results leave the service layer.
"""

from datetime import date

from babel import Locale, numbers

from ..calculations.constants import MONEY_DECIMALS

SUPPORTED_LANGUAGES = ("es", "en")

# Number conventions per display language (es displays 1.234,56)
NUMBER_LOCALES = {
    "es": "de_DE",
    "en": "en_US",
}

# Up to two decimals, trailing zeros dropped
AMOUNT_PATTERN = "#,##0.##"

MONTH_ABBREVIATIONS = {
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    "es": ["ene", "feb", "mar", "abr", "may", "jun",
           "jul", "ago", "sept", "oct", "nov", "dic"],
}


def normalize_language(language: str, default: str = "en") -> str:
    """Return language if supported, otherwise default."""
    if language in SUPPORTED_LANGUAGES:
        return language
    return default


def round_money(value: float) -> float:
    """Round a monetary value to cents."""
    return round(value, MONEY_DECIMALS)


def _month_name(day: date, language: str) -> str:
    months = MONTH_ABBREVIATIONS[normalize_language(language)]
    return months[day.month - 1]


def format_day_label(day: date, language: str = "en") -> str:
    """
    Label for a daily bucket.

    Examples:
        >>> format_day_label(date(2024, 1, 15), "en")
        'Jan 15'
        >>> format_day_label(date(2024, 1, 15), "es")
        '15 ene'
    """
    if normalize_language(language) == "es":
        return f"{day.day} {_month_name(day, language)}"
    return f"{_month_name(day, language)} {day.day}"


def format_month_label(day: date, language: str = "en") -> str:
    """
    Label for a monthly bucket: abbreviated month and two-digit year.

    Examples:
        >>> format_month_label(date(2024, 3, 1), "en")
        'Mar 24'
    """
    return f"{_month_name(day, language)} {day.year % 100:02d}"


def format_trend_label(day: date, language: str = "en") -> str:
    """
    Label for a trend point, same form as a daily bucket label.

    Examples:
        >>> format_trend_label(date(2024, 1, 15), "en")
        'Jan 15'
        >>> format_trend_label(date(2024, 1, 15), "es")
        '15 ene'
    """
    return format_day_label(day, language)


def format_currency(amount: float, language: str = "en", symbol: str = "$") -> str:
    """
    Format an amount with thousands separators and up to two decimals.

    Spanish uses "." for thousands and "," for decimals; English the reverse.
    Trailing zero decimals are dropped.

    Examples:
        >>> format_currency(15500, "es")
        '$15.500'
        >>> format_currency(15500, "en")
        '$15,500'
        >>> format_currency(1234.5, "en")
        '$1,234.5'
        >>> format_currency(1234.56, "es")
        '$1.234,56'
    """
    sign = "-" if amount < 0 else ""
    locale = Locale.parse(NUMBER_LOCALES[normalize_language(language)])
    number = numbers.format_decimal(abs(amount), format=AMOUNT_PATTERN, locale=locale)
    return f"{sign}{symbol}{number}"
