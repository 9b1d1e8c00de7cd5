"""Concurrent aggregation of the paginated historic quotes table.

The first page is fetched synchronously to learn the page count. Remaining
pages are fetched in parallel, each worker writing its own result slot, and
the slots are concatenated in page order. The first failing page ends the
aggregation immediately; workers still running are left to finish in the
background and their results are discarded.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from bs4 import BeautifulSoup

from stockalert.data.extractors import BoursoramaExtractor, FieldExtractor
from stockalert.data.fetcher import DocumentFetcher, HttpDocumentFetcher
from stockalert.data.urls import DEFAULT_BASE_URL, quotes_url
from stockalert.exceptions import DataValidationError
from stockalert.types import (
    DURATION_CHOICES,
    DURATIONS,
    PERIOD_CHOICES,
    PERIODS,
    AggregationRequest,
    Quote,
    QuotePage,
)

logger = logging.getLogger(__name__)


def validate_request(request: AggregationRequest) -> None:
    """Check the enumerated parameters of a request.

    :param request: Request to check.
    :raises DataValidationError: If duration or period is not an allowed value.
    """
    if request.duration not in DURATIONS:
        raise DataValidationError(f"Duration must be one of {list(DURATION_CHOICES)}")
    if request.period not in PERIODS:
        raise DataValidationError(f"Period must be one of {list(PERIOD_CHOICES)}")


class QuoteAggregator:
    """Fetches every page of a historic quotes table and merges the rows.

    :param fetcher: Document retrieval capability.
    :param extractor: Field extraction capability.
    :param base_url: Site base URL passed to the URL builder.
    :param max_workers: Worker threads for pages 2..N, None for one per page.
    """

    def __init__(
        self,
        fetcher: DocumentFetcher | None = None,
        extractor: FieldExtractor | None = None,
        base_url: str = DEFAULT_BASE_URL,
        max_workers: int | None = None,
    ) -> None:
        self.fetcher = fetcher or HttpDocumentFetcher()
        self.extractor = extractor or BoursoramaExtractor()
        self.base_url = base_url
        self.max_workers = max_workers

    def _page_url(self, request: AggregationRequest, page: int) -> str:
        return quotes_url(
            request.symbol,
            request.start_date,
            request.duration,
            request.period,
            page,
            base_url=self.base_url,
        )

    def fetch_page(self, request: AggregationRequest, page: int) -> QuotePage:
        """Fetch one page and extract its rows.

        :param request: Validated request.
        :param page: 1-based page index.
        :returns: Rows of the page.
        :raises DataSourceError: If fetching or parsing the page fails.
        """
        document = self.fetcher.fetch_document(self._page_url(request, page))
        quotes = self.extractor.extract_rows(document)
        logger.debug("Page %d of %s: %d rows", page, request.symbol, len(quotes))
        return QuotePage(index=page, quotes=quotes)

    def aggregate(self, request: AggregationRequest) -> list[Quote]:
        """Return all quotes of the request in page order.

        :param request: Request to serve.
        :returns: Quotes of every page, page 1 first.
        :raises DataValidationError: If the request has an invalid duration or period.
        :raises DataSourceError: If any page fails; no partial result is returned.
        """
        validate_request(request)
        logger.info(
            "Fetching quotes for %s from %s (duration=%s, period=%s)",
            request.symbol,
            request.start_date.isoformat(),
            request.duration,
            request.period,
        )

        first_document = self.fetcher.fetch_document(self._page_url(request, 1))
        page_count = self.extractor.extract_page_count(first_document)

        if page_count < 2:
            quotes = self.extractor.extract_rows(first_document)
        else:
            quotes = self._aggregate_pages(request, first_document, page_count)

        logger.info("Fetched %d quotes for %s", len(quotes), request.symbol)
        return quotes

    def _aggregate_pages(
        self,
        request: AggregationRequest,
        first_document: BeautifulSoup,
        page_count: int,
    ) -> list[Quote]:
        # One slot per page, each written only by the worker owning that index
        slots: list[list[Quote] | None] = [None] * page_count
        slots[0] = self.extractor.extract_rows(first_document)

        def fill_slot(page: int) -> None:
            slots[page - 1] = self.fetch_page(request, page).quotes

        logger.debug("Fetching pages 2..%d of %s", page_count, request.symbol)
        executor = ThreadPoolExecutor(
            max_workers=self.max_workers or page_count - 1,
            thread_name_prefix="quotes-page",
        )
        try:
            future_to_page: dict[Future[None], int] = {
                executor.submit(fill_slot, page): page
                for page in range(2, page_count + 1)
            }
            for future in as_completed(future_to_page):
                error = future.exception()
                if error is not None:
                    logger.warning(
                        "Page %d of %s failed: %s",
                        future_to_page[future],
                        request.symbol,
                        error,
                    )
                    raise error
        finally:
            # Never block on workers still in flight after a failure
            executor.shutdown(wait=False, cancel_futures=True)

        quotes: list[Quote] = []
        for page_quotes in slots:
            quotes.extend(page_quotes or [])
        return quotes


def aggregate_quotes(
    request: AggregationRequest,
    fetcher: DocumentFetcher | None = None,
    extractor: FieldExtractor | None = None,
    base_url: str = DEFAULT_BASE_URL,
    max_workers: int | None = None,
) -> list[Quote]:
    """Return all quotes of a historic quotes request in page order.

    Convenience wrapper around :meth:`QuoteAggregator.aggregate`.
    """
    aggregator = QuoteAggregator(
        fetcher=fetcher,
        extractor=extractor,
        base_url=base_url,
        max_workers=max_workers,
    )
    return aggregator.aggregate(request)
