"""Structured field extraction from retrieved documents.

The selectors of the source site are confined here; the aggregator and the
search only depend on the :class:`FieldExtractor` interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup, Tag

from stockalert.exceptions import DecodeError
from stockalert.types import Asset, Quote, Symbol


def _text(elements: list[Tag]) -> str:
    """Concatenated text of all matched elements."""
    return "".join(el.get_text() for el in elements)


class FieldExtractor(ABC):
    """Abstract base class for field extraction from parsed documents."""

    @abstractmethod
    def extract_rows(self, document: BeautifulSoup) -> list[Quote]:
        """Extract the quote rows of a historic quotes page, in document order.

        :param document: Parsed page.
        :returns: Quotes of the page.
        """
        ...

    @abstractmethod
    def extract_page_count(self, document: BeautifulSoup) -> int:
        """Extract the total number of pages from the pagination control.

        :param document: Parsed first page.
        :returns: Page count, at least 1.
        """
        ...

    @abstractmethod
    def extract_assets(self, document: BeautifulSoup) -> list[Asset]:
        """Extract the instruments listed by a search result page.

        :param document: Parsed search result page.
        :returns: Assets in document order.
        """
        ...


class BoursoramaExtractor(FieldExtractor):
    """Extractor for the boursorama.com markup."""

    ROW_SELECTOR = ".c-table tr"
    CELL_SELECTOR = ".c-table__cell"
    PAGINATION_SELECTOR = "span.c-pagination__content"

    def extract_rows(self, document: BeautifulSoup) -> list[Quote]:
        quotes = []
        # First row is the table header
        for row in document.select(self.ROW_SELECTOR)[1:]:
            first_cell = row.select_one(self.CELL_SELECTOR)
            if first_cell is None:
                quotes.append(Quote())
                continue

            price_cell = first_cell.find_next_sibling()
            quotes.append(
                Quote(
                    date=first_cell.get_text().strip(),
                    price=price_cell.get_text().strip() if price_cell else "",
                )
            )
        return quotes

    def extract_page_count(self, document: BeautifulSoup) -> int:
        return max(len(document.select(self.PAGINATION_SELECTOR)), 1)

    def extract_assets(self, document: BeautifulSoup) -> list[Asset]:
        result_list = document.select_one(".search__list")
        if result_list is None:
            return []

        assets = []
        for link in result_list.select(".search__list-link"):
            title = _text(link.select(".search__item-title"))
            other_info = _text(link.select(".search__item-content")).strip(" \n")
            name = f"{title}\n{other_info}"

            href = link.get("href")
            if not href:
                raise DecodeError(f"Unable to find the quote symbol for {name!r}")

            instrument = link.select(".search__item-instrument")
            last_price = "".join(_text(i.select(".last")) for i in instrument)
            variation = "".join(_text(i.select("[class^=u-color]")) for i in instrument)

            assets.append(
                Asset(
                    symbol=Symbol(self._symbol_from_link(str(href))),
                    name=name,
                    last_price=last_price,
                    price_variation=variation,
                )
            )
        return assets

    @staticmethod
    def _symbol_from_link(link: str) -> str:
        """Last path segment of an instrument link, ignoring a trailing slash."""
        segments = link.split("/")
        if link.endswith("/"):
            return segments[-2]
        return segments[-1]
