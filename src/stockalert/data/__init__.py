"""Remote data retrieval, extraction and aggregation module."""

from stockalert.data.aggregator import (QuoteAggregator, aggregate_quotes,
                                        validate_request)
from stockalert.data.extractors import BoursoramaExtractor, FieldExtractor
from stockalert.data.fetcher import DocumentFetcher, HttpDocumentFetcher
from stockalert.data.search import search_assets
from stockalert.data.ticks import decode_ticks, decode_timestamp, fetch_eod_ticks

__all__ = [
    "QuoteAggregator",
    "aggregate_quotes",
    "validate_request",
    "FieldExtractor",
    "BoursoramaExtractor",
    "DocumentFetcher",
    "HttpDocumentFetcher",
    "search_assets",
    "decode_ticks",
    "decode_timestamp",
    "fetch_eod_ticks",
]
