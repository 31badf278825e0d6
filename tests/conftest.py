import requests

from newest_sort_check.models import Article

NEWEST_URL = "https://news.ycombinator.com/newest"


def listing_html(rows: list[tuple[str | None, str | None]], more_href: str | None) -> str:
    """Render a minimal listing page with the same structure as the live site."""
    parts = ['<html><body><table id="hnmain"><tr><td><table>']
    for n, (title, age) in enumerate(rows, 1):
        title_cell = (
            f'<span class="titleline"><a href="https://example.com/{n}">{title}</a>'
            f' <span class="sitebit comhead">(<a href="from?site=example.com">'
            f'<span class="sitestr">example.com</span></a>)</span></span>'
            if title is not None
            else ""
        )
        age_cell = (
            f'<span class="age" title="2024-01-01T00:00:00"><a href="item?id={n}">{age}</a></span>'
            if age is not None
            else ""
        )
        parts.append(
            f'<tr class="athing submission" id="{n}">'
            f'<td class="title"><span class="rank">{n}.</span></td>'
            f'<td class="votelinks"></td>'
            f'<td class="title">{title_cell}</td></tr>'
            f'<tr><td colspan="2"></td><td class="subtext"><span class="subline">'
            f'<span class="score">1 point</span> by <a class="hnuser">user{n}</a> '
            f"{age_cell}</span></td></tr>"
            f'<tr class="spacer" style="height:5px"></tr>'
        )
    if more_href is not None:
        parts.append(
            f'<tr><td colspan="2"></td><td class="title">'
            f'<a href="{more_href}" class="morelink" rel="next">More</a></td></tr>'
        )
    parts.append("</table></td></tr></table></body></html>")
    return "".join(parts)


class FakeResponse:
    def __init__(self, text: str, url: str, status_code: int = 200) -> None:
        self.text = text
        self.url = url
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")


class FakeSession:
    """Serves canned responses (or raises canned exceptions) keyed by URL."""

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.headers: dict[str, str] = {}
        self.requested: list[tuple[str, float]] = []
        self.closed = False

    def get(self, url: str, timeout: float | None = None):
        self.requested.append((url, timeout))
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


class FakePager:
    """In-memory pager serving pre-built pages of articles."""

    def __init__(self, pages: list[list[Article]], error: Exception | None = None) -> None:
        self.pages = pages
        self.error = error
        self.index = 0
        self.fetch_calls = 0
        self.advance_calls = 0
        self.closed = False

    def __enter__(self) -> "FakePager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True

    def fetch_page(self) -> list[Article]:
        if self.error is not None:
            raise self.error
        self.fetch_calls += 1
        return list(self.pages[self.index])

    def has_more(self) -> bool:
        return self.index + 1 < len(self.pages)

    def advance(self) -> None:
        self.advance_calls += 1
        self.index += 1


def make_articles(ages: list[str | None], prefix: str = "Story") -> list[Article]:
    return [Article(title=f"{prefix} {i}", age_text=age) for i, age in enumerate(ages)]
