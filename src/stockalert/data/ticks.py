"""End-of-day tick feed ingestion and packed timestamp decoding.

Tick dates arrive packed as ten decimal digits ``YYMMDDmmmm``: a two-digit
year offset from 2000, month, day and the minute of the day. They are
decoded into Unix epoch milliseconds in the local timezone of the process.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from pydantic import ValidationError

from stockalert.data.fetcher import DocumentFetcher, HttpDocumentFetcher
from stockalert.data.urls import DEFAULT_TICKS_BASE_URL, eod_ticks_url
from stockalert.exceptions import DecodeError
from stockalert.types import DEFAULT_TICK_DAYS, EODTicks, EODTicksEnvelope

logger = logging.getLogger(__name__)

PACKED_TIMESTAMP_WIDTH = 10


def decode_timestamp(packed: int | str) -> int:
    """Decode a packed ``YYMMDDmmmm`` timestamp.

    Out-of-range fields roll over like calendar arithmetic: month 13 is
    January of the next year, day 32 of January is February 1st and a
    minute of the day past 1439 falls on the following day.

    :param packed: Packed value, as an integer or its decimal string.
    :returns: Unix epoch milliseconds of the local date and time.
    :raises DecodeError: If the value is not exactly ten decimal digits.
    """
    digits = str(packed)
    if len(digits) != PACKED_TIMESTAMP_WIDTH or not (digits.isascii() and digits.isdigit()):
        raise DecodeError(f"Invalid packed timestamp: {packed!r}")

    year = 2000 + int(digits[0:2])
    month = int(digits[2:4])
    day = int(digits[4:6])
    minute_of_day = int(digits[6:10])

    extra_years, month_index = divmod(month - 1, 12)
    first_of_month = datetime(year + extra_years, month_index + 1, 1)
    local_time = first_of_month + timedelta(days=day - 1, minutes=minute_of_day)
    return int(local_time.timestamp()) * 1000


def decode_ticks(ticks: EODTicks, strict: bool = False) -> EODTicks:
    """Decode the packed dates of a tick timeline.

    Snapshot ticks are left as served. In lenient mode an undecodable date is
    logged and kept unchanged; in strict mode it fails the whole batch.

    :param ticks: Tick collection as served by the feed.
    :param strict: Raise instead of keeping undecodable dates.
    :returns: New collection with decoded timeline dates.
    :raises DecodeError: In strict mode, on the first undecodable date.
    """
    timeline = []
    for tick in ticks.timeline:
        try:
            timeline.append(tick.model_copy(update={"date": decode_timestamp(tick.date)}))
        except DecodeError as e:
            if strict:
                raise
            logger.warning("Couldn't parse timestamp: %s", e)
            timeline.append(tick)

    return ticks.model_copy(update={"timeline": timeline})


def fetch_eod_ticks(
    symbol: str,
    days: str = DEFAULT_TICK_DAYS,
    fetcher: DocumentFetcher | None = None,
    base_url: str = DEFAULT_TICKS_BASE_URL,
    strict: bool = False,
) -> EODTicksEnvelope:
    """Fetch the end-of-day ticks of a symbol and decode their dates.

    :param symbol: Instrument symbol.
    :param days: Number of days of ticks.
    :param fetcher: Document retrieval capability.
    :param base_url: Chart feed base URL.
    :param strict: Fail on undecodable tick dates instead of keeping them.
    :returns: Decoded tick payload.
    :raises DataSourceError: If retrieval fails or the payload is malformed.
    """
    fetcher = fetcher or HttpDocumentFetcher()
    payload = fetcher.fetch_json(eod_ticks_url(symbol, days, base_url=base_url))

    try:
        envelope = EODTicksEnvelope.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"Malformed tick payload for {symbol}: {e}") from e

    logger.info(
        "Fetched %d ticks for %s", len(envelope.content.timeline), symbol.strip().upper()
    )
    return envelope.model_copy(
        update={"content": decode_ticks(envelope.content, strict=strict)}
    )
