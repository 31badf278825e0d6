"""Paginate a listing until enough articles have been collected."""

import dataclasses
import logging

from newest_sort_check.config import CollectionPolicy
from newest_sort_check.models import Article
from newest_sort_check.scraper import Pager

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class CollectionResult:
    articles: list[Article]
    pages_fetched: int
    exhausted: bool

    @property
    def count(self) -> int:
        return len(self.articles)

    def is_sufficient(self, policy: CollectionPolicy) -> bool:
        return self.count >= policy.min_articles


def collect_articles(pager: Pager, policy: CollectionPolicy) -> CollectionResult:
    """Accumulate articles across pages.

    Stops after ``policy.max_pages`` pages, as soon as ``policy.min_articles``
    have been seen, or when the pager has no further page. Collaborator
    errors propagate unchanged.
    """
    articles: list[Article] = []
    pages = 0
    exhausted = False

    while pages < policy.max_pages:
        page_articles = pager.fetch_page()
        pages += 1
        articles.extend(page_articles)
        logger.debug(
            "Page %d: %d articles (%d total)", pages, len(page_articles), len(articles)
        )

        if len(articles) >= policy.min_articles:
            break
        if pages == policy.max_pages:
            break

        if pager.has_more():
            pager.advance()
        else:
            logger.info("No 'More' link found, stopping pagination.")
            exhausted = True
            break

    return CollectionResult(articles=articles, pages_fetched=pages, exhausted=exhausted)
