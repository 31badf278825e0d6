"""Pager protocol: the data-source abstraction layer."""

from typing import Protocol, runtime_checkable

from newest_sort_check.models import Article


@runtime_checkable
class Pager(Protocol):
    def fetch_page(self) -> list[Article]: ...

    def has_more(self) -> bool: ...

    def advance(self) -> None: ...
