"""Fetch targets for the boursorama.com endpoints.

Every builder is pure and total: malformed input still renders a URL, and
the fetch that follows is what fails.
"""

from __future__ import annotations

from datetime import date
from urllib.parse import quote_plus

from stockalert.types import DEFAULT_BASE_URL, DEFAULT_TICKS_BASE_URL

# Day/month/year layout expected by the historic quotes form
START_DATE_FORMAT = "%d/%m/%Y"


def _sanitize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def format_start_date(start_date: date) -> str:
    """Render a start date the way the historic quotes form expects it."""
    return start_date.strftime(START_DATE_FORMAT)


def quotes_url(
    symbol: str,
    start_date: date,
    duration: str,
    period: str,
    page: int = 1,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build the URL of one page of the historic quotes table.

    Page 1 has no page segment; later pages insert ``page-{n}`` in the path.

    :param symbol: Instrument symbol (trimmed and upper-cased).
    :param start_date: First day of the history.
    :param duration: Duration value of the form.
    :param period: Period value of the form.
    :param page: 1-based page index.
    :param base_url: Site base URL.
    :returns: Absolute URL of the page.
    """
    path = f"{base_url.rstrip('/')}/_formulaire-periode/"
    if page != 1:
        path += f"page-{page}"

    return (
        f"{path}?symbol={_sanitize_symbol(symbol)}"
        f"&historic_search[startDate]={format_start_date(start_date)}"
        f"&historic_search[duration]={duration}"
        f"&historic_search[period]={period}"
    )


def search_url(query: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Build the URL of the keyword search endpoint."""
    return f"{base_url.rstrip('/')}/recherche/ajax?query={quote_plus(query.strip())}"


def eod_ticks_url(
    symbol: str, days: str, base_url: str = DEFAULT_TICKS_BASE_URL
) -> str:
    """Build the URL of the end-of-day ticks feed.

    :param symbol: Instrument symbol (trimmed and upper-cased).
    :param days: Number of days of ticks, passed as the feed's ``length``.
    :param base_url: Chart feed base URL.
    """
    return (
        f"{base_url.rstrip('/')}/bourse/action/graph/ws/GetTicksEOD"
        f"?symbol={_sanitize_symbol(symbol)}"
        f"&length={str(days).strip().upper()}&period=0&guid="
    )


def update_charts_url(symbol: str, base_url: str = DEFAULT_TICKS_BASE_URL) -> str:
    """Build the URL of the live chart update feed."""
    return (
        f"{base_url.rstrip('/')}/bourse/action/graph/ws/UpdateCharts"
        f"?symbol={_sanitize_symbol(symbol)}&period=-1"
    )
