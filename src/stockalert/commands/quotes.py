"""Parameter defaulting for the quotes command."""

from __future__ import annotations

import calendar
from datetime import date, datetime

from stockalert.exceptions import DataValidationError
from stockalert.types import AggregationRequest, QuotesDefaults, Symbol

# Accepted start date layouts, the form's own layout first
START_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")


def one_month_before(day: date) -> date:
    """Same day of the previous month, clamped to that month's length."""
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_start_date(value: str) -> date:
    """Parse a start date given as ``DD/MM/YYYY`` or ``YYYY-MM-DD``.

    :param value: Date string.
    :returns: Parsed date.
    :raises DataValidationError: If no accepted layout matches.
    """
    for fmt in START_DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue
    raise DataValidationError(f"Invalid start date: {value}")


def build_quotes_request(
    symbol: str,
    start_date: str | None = None,
    duration: str | None = None,
    period: str | None = None,
    defaults: QuotesDefaults | None = None,
    today: date | None = None,
) -> AggregationRequest:
    """Build a quotes request, filling in missing parameters.

    Missing start date defaults to one month before ``today``; missing
    duration and period come from ``defaults``. Duration and period are not
    checked here, the aggregator rejects invalid values.

    :param symbol: Instrument symbol.
    :param start_date: Start date string, or None.
    :param duration: Duration, or None.
    :param period: Period, or None.
    :param defaults: Configured defaults.
    :param today: Reference day for the start date default.
    :returns: Request ready for aggregation.
    :raises DataValidationError: If the symbol is blank or the date is invalid.
    """
    if not symbol or not symbol.strip():
        raise DataValidationError("Missing symbol")

    defaults = defaults or QuotesDefaults()
    if start_date is None:
        start = one_month_before(today or date.today())
    else:
        start = parse_start_date(start_date)

    return AggregationRequest(
        symbol=Symbol(symbol),
        start_date=start,
        duration=duration if duration is not None else defaults.duration,
        period=period if period is not None else defaults.period,
    )
