"""Shared fixtures: in-memory fetchers and HTML pages mimicking the site."""

from __future__ import annotations

import threading
import time
from typing import Any

import pytest
from bs4 import BeautifulSoup

from stockalert.data.fetcher import DocumentFetcher


def quotes_page_html(rows: list[tuple[str, str]], page_count: int = 0) -> str:
    """Render a historic quotes page with a header row and pagination spans."""
    body = "".join(
        f'<tr class="c-table__row">'
        f'<td class="c-table__cell">{date}</td>'
        f'<td class="c-table__cell">{price}</td>'
        f"</tr>"
        for date, price in rows
    )
    pagination = "".join(
        f'<span class="c-pagination__content">{i + 1}</span>'
        for i in range(page_count)
    )
    return (
        "<html><body>"
        '<table class="c-table">'
        '<tr><th class="c-table__cell">Date</th><th class="c-table__cell">Cours</th></tr>'
        f"{body}</table>"
        f'<div class="c-pagination">{pagination}</div>'
        "</body></html>"
    )


class FakeFetcher(DocumentFetcher):
    """Fetcher serving canned responses keyed by a URL fragment.

    A response is an HTML string, a JSON-compatible value (for
    ``fetch_json``) or an exception instance to raise. ``delays`` maps a
    fragment to seconds to sleep and ``gates`` to an event to wait on before
    answering.
    """

    def __init__(
        self,
        responses: dict[str, Any],
        delays: dict[str, float] | None = None,
        gates: dict[str, threading.Event] | None = None,
    ) -> None:
        self.responses = responses
        self.delays = delays or {}
        self.gates = gates or {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    @staticmethod
    def _match(table: dict[str, Any], target: str) -> str | None:
        # Longest fragment wins so "page-2" beats the page-1 path
        matches = [key for key in table if key in target]
        return max(matches, key=len) if matches else None

    def _respond(self, target: str) -> Any:
        with self._lock:
            self.calls.append(target)

        gate_key = self._match(self.gates, target)
        if gate_key is not None:
            self.gates[gate_key].wait(timeout=5)

        delay_key = self._match(self.delays, target)
        if delay_key is not None:
            time.sleep(self.delays[delay_key])

        key = self._match(self.responses, target)
        if key is None:
            raise KeyError(f"No canned response for {target}")
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response

    def fetch_document(self, target: str) -> BeautifulSoup:
        return BeautifulSoup(self._respond(target), "html.parser")

    def fetch_json(self, target: str) -> Any:
        return self._respond(target)


@pytest.fixture
def make_page():
    """Factory rendering a historic quotes page."""
    return quotes_page_html
