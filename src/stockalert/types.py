"""Core type definitions for the stock alert package.

All data models use Pydantic BaseModel for automatic validation, JSON
serialization, and better error messages.
"""

from __future__ import annotations

from datetime import date
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

# Type aliases for domain-specific identifiers
Symbol = NewType("Symbol", str)

# Allowed values for the historic quotes form, in the order the site lists them
DURATION_CHOICES = (
    "1M", "2M", "3M", "4M", "5M", "6M", "7M", "8M", "9M", "10M", "11M",
    "1Y", "2Y", "3Y",
)
PERIOD_CHOICES = ("1", "7", "30", "365")

DURATIONS = frozenset(DURATION_CHOICES)
PERIODS = frozenset(PERIOD_CHOICES)

DEFAULT_DURATION = "3M"
DEFAULT_PERIOD = "1"
DEFAULT_TICK_DAYS = "1"

DEFAULT_BASE_URL = "http://www.boursorama.com"
DEFAULT_TICKS_BASE_URL = "https://www.boursorama.com"


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


class AliasedModel(FrozenModel):
    """Frozen model mapped onto the short JSON keys of the tick feed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Quote Types
# ---------------------------------------------------------------------------


class Quote(FrozenModel):
    """One row of a historic quotes table.

    Values are kept as the text shown by the site (thousands separators and
    locale formatting are left to the caller).

    :param date: Date label of the row.
    :param price: Price label of the row.
    """

    date: str = ""
    price: str = ""


class QuotePage(FrozenModel):
    """Quotes extracted from a single page of the historic quotes table.

    :param index: 1-based page number.
    :param quotes: Rows of the page in document order.
    """

    index: int = Field(ge=1)
    quotes: list[Quote] = Field(default_factory=list)


class AggregationRequest(FrozenModel):
    """Parameters of a historic quotes request.

    ``duration`` and ``period`` are checked against :data:`DURATIONS` and
    :data:`PERIODS` by the aggregator before anything is fetched.

    :param symbol: Instrument symbol as known by the site.
    :param start_date: First day of the requested history.
    :param duration: Length of the history (e.g. "3M", "1Y").
    :param period: Sampling period in days ("1", "7", "30" or "365").
    """

    symbol: Symbol
    start_date: date
    duration: str = DEFAULT_DURATION
    period: str = DEFAULT_PERIOD


class Asset(FrozenModel):
    """Instrument returned by a keyword search.

    :param symbol: Symbol parsed from the instrument link.
    :param name: Instrument title followed by its secondary description.
    :param last_price: Last price label.
    :param price_variation: Variation label (e.g. "+1.25%").
    """

    symbol: Symbol
    name: str
    last_price: str = ""
    price_variation: str = ""


# ---------------------------------------------------------------------------
# Tick Types
# ---------------------------------------------------------------------------


class Tick(AliasedModel):
    """End-of-day tick as served by the chart feed.

    ``date`` holds the packed ``YYMMDDmmmm`` value until decoded, then the
    Unix epoch in milliseconds.

    :param date: Packed timestamp or epoch milliseconds.
    :param open: Opening price.
    :param high: Highest price.
    :param low: Lowest price.
    :param close: Closing price.
    :param volume: Traded volume.
    """

    date: int = Field(alias="d")
    open: float = Field(alias="o")
    high: float = Field(alias="h")
    low: float = Field(alias="l")
    close: float = Field(alias="c")
    volume: int = Field(default=0, alias="v", ge=0)


class EODTicks(AliasedModel):
    """Tick collection for one symbol.

    :param name: Instrument name.
    :param symbol_id: Symbol identifier used by the feed.
    :param period: Feed period code.
    :param three_days_ago: Snapshot tick from three sessions ago.
    :param current_day: Snapshot tick for the current session.
    :param timeline: Ordered ticks.
    """

    name: str = Field(default="", alias="Name")
    symbol_id: str = Field(default="", alias="SymbolId")
    period: int = Field(default=0, alias="Xperiod")
    three_days_ago: Tick | None = Field(default=None, alias="qv")
    current_day: Tick | None = Field(default=None, alias="qd")
    timeline: list[Tick] = Field(default_factory=list, alias="QuoteTab")


class EODTicksEnvelope(AliasedModel):
    """JSON payload wrapping an :class:`EODTicks` under the ``d`` key."""

    content: EODTicks = Field(alias="d")


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class SourceConfig(FrozenModel):
    """Connection settings for the remote source.

    :param base_url: Base URL for the quotes form and the search endpoint.
    :param ticks_base_url: Base URL for the chart feed endpoints.
    :param timeout: Request timeout in seconds, None for the transport default.
    :param max_workers: Worker threads for page fetches, None for one per page.
    :param headers: Extra request headers (e.g. User-Agent).
    """

    base_url: str = DEFAULT_BASE_URL
    ticks_base_url: str = DEFAULT_TICKS_BASE_URL
    timeout: float | None = None
    max_workers: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class QuotesDefaults(FrozenModel):
    """Defaults applied by the quotes command.

    :param duration: Default duration.
    :param period: Default period.
    """

    duration: str = DEFAULT_DURATION
    period: str = DEFAULT_PERIOD


class TicksDefaults(FrozenModel):
    """Defaults applied by the ticks command.

    :param days: Number of days of ticks to request.
    :param strict: Whether undecodable tick dates fail the request.
    """

    days: str = DEFAULT_TICK_DAYS
    strict: bool = False


class AppConfig(FrozenModel):
    """Top-level configuration loaded from YAML.

    :param source: Remote source settings.
    :param log_level: Logging level.
    :param log_file: Path of a log file, None to log to the console only.
    :param quotes: Quotes command defaults.
    :param ticks: Ticks command defaults.
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    log_level: str = "INFO"
    log_file: str | None = None
    quotes: QuotesDefaults = Field(default_factory=QuotesDefaults)
    ticks: TicksDefaults = Field(default_factory=TicksDefaults)


def dump_models(models: list[BaseModel]) -> list[dict[str, Any]]:
    """Serialize a list of models to JSON-compatible dicts by alias."""
    return [m.model_dump(mode="json", by_alias=True) for m in models]
