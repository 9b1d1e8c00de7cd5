"""Document retrieval for the remote source.

This module provides an abstract fetcher interface and the HTTP
implementation built on requests. A fetch is a single attempt: no retry,
no session reuse, no caching.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests
from bs4 import BeautifulSoup, ParserRejectedMarkup

from stockalert.exceptions import DecodeError, StatusError, TransportError

logger = logging.getLogger(__name__)


class DocumentFetcher(ABC):
    """Abstract base class for document retrieval.

    Implementations must raise :class:`TransportError` when the retrieval
    cannot complete, :class:`StatusError` when the source answers with a
    non-success status and :class:`DecodeError` when the payload cannot be
    parsed.
    """

    @abstractmethod
    def fetch_document(self, target: str) -> BeautifulSoup:
        """Retrieve ``target`` and parse it as HTML.

        :param target: URL to retrieve.
        :returns: Parsed HTML document.
        :raises DataSourceError: If the retrieval or the parsing fails.
        """
        ...

    @abstractmethod
    def fetch_json(self, target: str) -> Any:
        """Retrieve ``target`` and parse it as JSON.

        :param target: URL to retrieve.
        :returns: Decoded JSON value.
        :raises DataSourceError: If the retrieval or the parsing fails.
        """
        ...


class HttpDocumentFetcher(DocumentFetcher):
    """Fetcher issuing one ``requests.get`` per call.

    :param timeout: Request timeout in seconds, None for the transport default.
    :param headers: Extra headers sent with every request.
    :param parser: BeautifulSoup parser name.
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        parser: str = "html.parser",
    ) -> None:
        self.timeout = timeout
        self.headers = dict(headers or {})
        self.parser = parser

    def _get(self, target: str) -> requests.Response:
        logger.debug("GET %s", target)
        try:
            response = requests.get(target, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Failed to retrieve {target}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise StatusError(response.status_code, response.reason or "")
        return response

    def fetch_document(self, target: str) -> BeautifulSoup:
        """Retrieve ``target`` and parse it as HTML."""
        response = self._get(target)
        try:
            return BeautifulSoup(response.content, self.parser)
        except (ParserRejectedMarkup, ValueError) as e:
            raise DecodeError(f"Failed to parse HTML from {target}: {e}") from e

    def fetch_json(self, target: str) -> Any:
        """Retrieve ``target`` and parse it as JSON."""
        response = self._get(target)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Failed to parse JSON from {target}: {e}") from e
