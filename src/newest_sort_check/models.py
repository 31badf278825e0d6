"""Article dataclass for a single row of the newest listing."""

import dataclasses


@dataclasses.dataclass(frozen=True)
class Article:
    """Title and relative age text as shown on the listing page.

    Either field may be ``None`` when the corresponding element was missing.
    """

    title: str | None
    age_text: str | None

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "Article":
        return cls(title=d.get("title"), age_text=d.get("age_text"))
