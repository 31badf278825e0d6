"""Pagination policy and its defaults."""

import dataclasses

DEFAULT_URL = "https://news.ycombinator.com/newest"
DEFAULT_MAX_PAGES = 4
DEFAULT_MIN_ARTICLES = 100
DEFAULT_WAIT_TIMEOUT = 5.0

MAX_PAGES_ENV = "NEWEST_MAX_PAGES"
MIN_ARTICLES_ENV = "NEWEST_MIN_ARTICLES"
WAIT_TIMEOUT_ENV = "NEWEST_WAIT_TIMEOUT"


@dataclasses.dataclass(frozen=True)
class CollectionPolicy:
    """How far the collection loop paginates and how long it waits per page."""

    max_pages: int = DEFAULT_MAX_PAGES
    min_articles: int = DEFAULT_MIN_ARTICLES
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT

    def __post_init__(self) -> None:
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {self.max_pages}")
        if self.min_articles < 0:
            raise ValueError(
                f"min_articles must not be negative, got {self.min_articles}"
            )
        if self.wait_timeout <= 0:
            raise ValueError(
                f"wait_timeout must be positive, got {self.wait_timeout}"
            )
