"""Pager that drives a real Chromium instance through Playwright."""

import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from newest_sort_check.config import DEFAULT_URL, DEFAULT_WAIT_TIMEOUT
from newest_sort_check.exceptions import (
    CollaboratorError,
    FetchTimeoutError,
    MissingElementError,
    UnexpectedLocationError,
)
from newest_sort_check.models import Article
from newest_sort_check.scrapers.hackernews import (
    AGE_SELECTOR,
    MORE_SELECTOR,
    TITLE_SELECTOR,
)

ROW_SELECTOR = ".athing"

EXTRACT_ROWS_JS = """
([rowSelector, titleSelector, ageSelector]) => {
    const rows = document.querySelectorAll(rowSelector);
    return Array.from(rows).map((row) => {
        const title = row.querySelector(titleSelector)?.innerText ?? null;
        const sibling = row.nextElementSibling;
        const age = sibling ? sibling.querySelector(ageSelector)?.innerText ?? null : null;
        return { title, age_text: age };
    });
}
"""

logger = logging.getLogger(__name__)


class BrowserPager:
    """Render the listing in Chromium and click through "More" links."""

    def __init__(
        self,
        url: str = DEFAULT_URL,
        wait_timeout: float = DEFAULT_WAIT_TIMEOUT,
        headless: bool = True,
    ) -> None:
        self._url = url
        self._timeout_ms = wait_timeout * 1000
        self._wait_timeout = wait_timeout
        self._headless = headless
        self._playwright = None
        self._browser = None
        self._page = None

    def __enter__(self) -> "BrowserPager":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open(self) -> None:
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self._headless)
            context = self._browser.new_context()
            self._page = context.new_page()
            logger.debug("Navigating to %s", self._url)
            self._page.goto(self._url, timeout=self._timeout_ms)
        except PlaywrightTimeoutError as e:
            self.close()
            raise FetchTimeoutError(self._url, self._wait_timeout) from e
        except PlaywrightError as e:
            self.close()
            raise CollaboratorError(f"Failed to open {self._url}: {e}") from e

        if self._page.url != self._url:
            actual = self._page.url
            self.close()
            raise UnexpectedLocationError(self._url, actual)

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self._page = None

    def fetch_page(self) -> list[Article]:
        if self._page is None:
            raise CollaboratorError("Pager has not been opened")
        try:
            rows = self._page.evaluate(
                EXTRACT_ROWS_JS, [ROW_SELECTOR, TITLE_SELECTOR, AGE_SELECTOR]
            )
        except PlaywrightError as e:
            raise CollaboratorError(f"Failed to read articles: {e}") from e
        return [Article.from_dict(row) for row in rows]

    def has_more(self) -> bool:
        return self._find_more() is not None

    def advance(self) -> None:
        more = self._find_more()
        if more is None:
            raise MissingElementError(MORE_SELECTOR)
        try:
            with self._page.expect_navigation(timeout=self._timeout_ms):
                more.click()
            self._page.wait_for_selector(ROW_SELECTOR, timeout=self._timeout_ms)
        except PlaywrightTimeoutError as e:
            raise FetchTimeoutError(self._page.url, self._wait_timeout) from e
        except PlaywrightError as e:
            raise CollaboratorError(f"Failed to load next page: {e}") from e
        logger.debug("Advanced to %s", self._page.url)

    def _find_more(self):
        if self._page is None:
            return None
        try:
            return self._page.query_selector(MORE_SELECTOR)
        except PlaywrightError as e:
            raise CollaboratorError(f"Failed to look for {MORE_SELECTOR}: {e}") from e
