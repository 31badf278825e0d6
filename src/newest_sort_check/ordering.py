"""Newest-first ordering checks over parsed ages."""

import dataclasses
from collections.abc import Sequence

from newest_sort_check.age import UNPARSEABLE, parse_ages
from newest_sort_check.models import Article


@dataclasses.dataclass
class OrderReport:
    """Outcome of checking one article sequence."""

    ages: list[int]
    is_sorted: bool
    first_violation: int | None
    unparseable: list[int]


def first_violation(ages: Sequence[int]) -> int | None:
    """Return the index ``i`` of the first pair with ``ages[i-1] > ages[i]``."""
    for i in range(1, len(ages)):
        if ages[i - 1] > ages[i]:
            return i
    return None


def is_non_decreasing(ages: Sequence[int]) -> bool:
    """True when every age is at least as old as the one before it.

    Sentinel values take part in the comparison as plain integers, so an
    unparseable entry always looks newer than any parsed one.
    """
    return first_violation(ages) is None


def check_order(articles: Sequence[Article]) -> OrderReport:
    ages = parse_ages(a.age_text for a in articles)
    violation = first_violation(ages)
    return OrderReport(
        ages=ages,
        is_sorted=violation is None,
        first_violation=violation,
        unparseable=[i for i, age in enumerate(ages) if age == UNPARSEABLE],
    )
