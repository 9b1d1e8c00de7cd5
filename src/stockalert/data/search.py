"""Keyword search for instruments."""

from __future__ import annotations

import logging

from stockalert.data.extractors import BoursoramaExtractor, FieldExtractor
from stockalert.data.fetcher import DocumentFetcher, HttpDocumentFetcher
from stockalert.data.urls import DEFAULT_BASE_URL, search_url
from stockalert.exceptions import DataValidationError
from stockalert.types import Asset

logger = logging.getLogger(__name__)


def search_assets(
    query: str,
    fetcher: DocumentFetcher | None = None,
    extractor: FieldExtractor | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> list[Asset]:
    """Search instruments matching ``query``.

    :param query: Free-text query (name, symbol or ISIN).
    :param fetcher: Document retrieval capability.
    :param extractor: Field extraction capability.
    :param base_url: Site base URL.
    :returns: Matching assets in the order the site lists them.
    :raises DataValidationError: If the query is blank.
    :raises DataSourceError: If the search page cannot be retrieved or parsed.
    """
    if not query or not query.strip():
        raise DataValidationError("Missing query value")

    fetcher = fetcher or HttpDocumentFetcher()
    extractor = extractor or BoursoramaExtractor()

    document = fetcher.fetch_document(search_url(query, base_url=base_url))
    assets = extractor.extract_assets(document)
    logger.info("Search %r returned %d assets", query.strip(), len(assets))
    return assets
