"""Pager for the Hacker News "newest" listing, fetched as static HTML."""

import logging
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, Tag

from newest_sort_check.config import DEFAULT_URL, DEFAULT_WAIT_TIMEOUT
from newest_sort_check.exceptions import (
    CollaboratorError,
    FetchTimeoutError,
    MissingElementError,
    UnexpectedLocationError,
)
from newest_sort_check.models import Article

logger = logging.getLogger(__name__)

ROW_SELECTOR = "tr.athing"
TITLE_SELECTOR = ".title a"
AGE_SELECTOR = "td.subtext span.subline span.age a"
MORE_SELECTOR = "a.morelink"

USER_AGENT = "newest-sort-check (+https://news.ycombinator.com/newest)"


def parse_listing(html: str) -> list[Article]:
    """Extract one Article per ``tr.athing`` row of a listing page."""
    soup = BeautifulSoup(html, "html.parser")
    articles: list[Article] = []

    for row in soup.select(ROW_SELECTOR):
        title_link = row.select_one(TITLE_SELECTOR)
        title = title_link.get_text(strip=True) if title_link else None

        # The age lives in the subtext row directly below the title row.
        age_text = None
        subtext_row = row.find_next_sibling("tr")
        if isinstance(subtext_row, Tag):
            age_link = subtext_row.select_one(AGE_SELECTOR)
            if age_link:
                age_text = age_link.get_text(strip=True)

        articles.append(Article(title=title, age_text=age_text))

    return articles


class HackerNewsPager:
    """Walk the listing by following its "More" link."""

    def __init__(
        self,
        url: str = DEFAULT_URL,
        wait_timeout: float = DEFAULT_WAIT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._timeout = wait_timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self._session = session
        self._current_url: str | None = None
        self._soup: BeautifulSoup | None = None
        self._html = ""

    def __enter__(self) -> "HackerNewsPager":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open(self) -> None:
        """Load the first page and make sure no redirect moved us elsewhere."""
        final_url = self._load(self._url)
        if final_url != self._url:
            raise UnexpectedLocationError(self._url, final_url)

    def close(self) -> None:
        self._session.close()

    def fetch_page(self) -> list[Article]:
        if self._current_url is None:
            raise CollaboratorError("Pager has not been opened")
        return parse_listing(self._html)

    def has_more(self) -> bool:
        return self._soup is not None and self._soup.select_one(MORE_SELECTOR) is not None

    def advance(self) -> None:
        more = self._soup.select_one(MORE_SELECTOR) if self._soup is not None else None
        if more is None or not more.get("href"):
            raise MissingElementError(MORE_SELECTOR)
        self._load(urljoin(self._current_url, more["href"]))

    def _load(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise FetchTimeoutError(url, self._timeout) from e
        except requests.RequestException as e:
            raise CollaboratorError(f"Failed to fetch {url}: {e}") from e

        self._html = response.text
        self._soup = BeautifulSoup(self._html, "html.parser")
        self._current_url = response.url
        return response.url
