"""Relative age parsing: "5 minutes ago" -> 300."""

import re
from collections.abc import Iterable

# Returned for anything that is not "<N> second|minute|hour[s] ago".
UNPARSEABLE = -1

UNIT_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
}

# Unanchored and case-sensitive; the first match in the text wins.
AGE_PATTERN = re.compile(r"([0-9]+)\s*(second|minute|hour)s?\s*ago")


def parse_age(text: str | None) -> int:
    """Convert a relative age string into seconds, or ``UNPARSEABLE``.

    Never raises: empty input and non-string values are unparseable too.
    """
    if not text or not isinstance(text, str):
        return UNPARSEABLE
    match = AGE_PATTERN.search(text)
    if match is None:
        return UNPARSEABLE
    amount = int(match.group(1))
    return amount * UNIT_SECONDS[match.group(2)]


def parse_ages(texts: Iterable[str | None]) -> list[int]:
    return [parse_age(text) for text in texts]
