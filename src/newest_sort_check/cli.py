"""CLI: check that the newest listing is ordered newest to oldest."""

import json
import logging
import os
import sys
from contextlib import AbstractContextManager
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from newest_sort_check.collect import collect_articles
from newest_sort_check.config import (
    DEFAULT_MAX_PAGES,
    DEFAULT_MIN_ARTICLES,
    DEFAULT_URL,
    DEFAULT_WAIT_TIMEOUT,
    MAX_PAGES_ENV,
    MIN_ARTICLES_ENV,
    WAIT_TIMEOUT_ENV,
    CollectionPolicy,
)
from newest_sort_check.exceptions import CollaboratorError
from newest_sort_check.models import Article
from newest_sort_check.ordering import OrderReport, check_order
from newest_sort_check.scraper import Pager

EXIT_FAILURE = 1
EXIT_INSUFFICIENT = 3

DEFAULT_LOG_LEVEL = "WARNING"

app = typer.Typer(
    name="newest-sort-check",
    help="Verify that a newest-first listing is sorted from newest to oldest.",
)

console = Console(highlight=False)


class Backend(str, Enum):
    http = "http"
    browser = "browser"


def _log_level(verbose: bool) -> str:
    if verbose:
        return "DEBUG"
    level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    # getLevelName maps known names to ints and echoes "Level X" otherwise.
    if not isinstance(logging.getLevelName(level), int):
        return DEFAULT_LOG_LEVEL
    return level


def _configure_logging(verbose: bool) -> None:
    level = _log_level(verbose)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _open_pager(
    backend: Backend, url: str, policy: CollectionPolicy, headed: bool
) -> AbstractContextManager[Pager]:
    if backend is Backend.browser:
        from newest_sort_check.scrapers.browser import BrowserPager

        return BrowserPager(url=url, wait_timeout=policy.wait_timeout, headless=not headed)

    from newest_sort_check.scrapers.hackernews import HackerNewsPager

    return HackerNewsPager(url=url, wait_timeout=policy.wait_timeout)


def _describe(article: Article) -> str:
    return escape(f"{article.age_text!r} ({article.title})")


def _print_report(articles: list[Article], report: OrderReport) -> None:
    console.print(f"Checked {len(articles)} articles.")

    if report.unparseable:
        console.print(
            f"[yellow]Warning:[/yellow] {len(report.unparseable)} article(s) had an "
            "unrecognised age and were compared as -1."
        )
        for i in report.unparseable[:5]:
            console.print(f"  #{i + 1}: {_describe(articles[i])}")

    if report.is_sorted:
        console.print("[green]Articles are correctly sorted from newest to oldest.[/green]")
        return

    console.print("[red]Articles are NOT sorted correctly![/red]")
    i = report.first_violation
    console.print(
        f"  #{i}: {_describe(articles[i - 1])}\n"
        f"  #{i + 1}: {_describe(articles[i])}"
    )


@app.command()
def check(
    url: Annotated[
        str,
        typer.Option(help="Listing URL to start from"),
    ] = DEFAULT_URL,
    backend: Annotated[
        Backend,
        typer.Option(help="How pages are fetched"),
    ] = Backend.http,
    max_pages: Annotated[
        int,
        typer.Option(min=1, envvar=MAX_PAGES_ENV, help="Maximum pages to visit"),
    ] = DEFAULT_MAX_PAGES,
    min_articles: Annotated[
        int,
        typer.Option(
            min=0, envvar=MIN_ARTICLES_ENV, help="Articles needed before validating"
        ),
    ] = DEFAULT_MIN_ARTICLES,
    wait_timeout: Annotated[
        float,
        typer.Option(
            min=0.1, envvar=WAIT_TIMEOUT_ENV, help="Seconds to wait for each page"
        ),
    ] = DEFAULT_WAIT_TIMEOUT,
    headed: Annotated[
        bool,
        typer.Option("--headed", help="Show the browser window (browser backend)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Fetch the listing, paginate, and check its ordering."""
    _configure_logging(verbose)
    policy = CollectionPolicy(
        max_pages=max_pages, min_articles=min_articles, wait_timeout=wait_timeout
    )

    try:
        with console.status(f"Collecting articles from {url}..."):
            with _open_pager(backend, url, policy, headed) as pager:
                result = collect_articles(pager, policy)
    except CollaboratorError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_FAILURE)

    console.print(f"Collected {result.count} articles from {result.pages_fetched} page(s).")
    if not result.is_sufficient(policy):
        console.print(
            f"Only found {result.count} articles, expected at least {policy.min_articles}."
        )
        raise typer.Exit(code=EXIT_INSUFFICIENT)

    _print_report(result.articles, check_order(result.articles))


@app.command()
def check_file(
    path: Annotated[
        Path,
        typer.Argument(help="JSON array of {title, age_text} records"),
    ],
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Check the ordering of records saved in a JSON file."""
    _configure_logging(verbose)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] could not read {path}: {escape(str(e))}")
        raise typer.Exit(code=EXIT_FAILURE)

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        console.print(f"[red]Error:[/red] {path} must contain a JSON array of objects")
        raise typer.Exit(code=EXIT_FAILURE)

    for n, item in enumerate(data, 1):
        for field in ("title", "age_text"):
            value = item.get(field)
            if value is not None and not isinstance(value, str):
                console.print(
                    f"[red]Error:[/red] record #{n}: {field} must be a string or null, "
                    f"got {type(value).__name__}"
                )
                raise typer.Exit(code=EXIT_FAILURE)

    articles = [Article.from_dict(item) for item in data]
    logging.getLogger(__name__).debug("Loaded %d records from %s", len(articles), path)
    _print_report(articles, check_order(articles))


def main() -> None:
    """Console entry point; runs ``check`` when no subcommand is given."""
    # Loaded before parsing so .env values reach the envvar-backed options.
    load_dotenv()
    app(args=sys.argv[1:] or ["check"])
