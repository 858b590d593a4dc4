"""
Data models for the JLPT grammar scraper.

Field order matches the CSV/JSON output layout.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional

# Detail pages list many examples; only the first few are kept.
MAX_EXAMPLES = 3


@dataclass
class Example:
    """Example sentence attached to a grammar point."""

    id: str
    sentence: str = ""
    reading: str = ""
    meaning: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    def to_csv_fields(self) -> list[str]:
        return [self.id, self.sentence, self.reading, self.meaning]


@dataclass
class NoteTarget:
    """
    Preliminary record parsed from one listing table row.

    Used by the listing navigator to pass discovery results to the
    detail parser. `page` and `position` remember where the row was
    found so the final output can be put back into listing order.
    """

    id: str
    url: str
    grammar: str = ""
    reading: str = ""
    meaning: str = ""

    page: int = 1
    position: int = 0

    # Optional metadata from discovery phase
    metadata: dict = field(default_factory=dict)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.page, self.position)


@dataclass
class Note:
    """
    Complete grammar point record.

    This is the primary output of the scraping pipeline.
    """

    id: str
    url: str
    grammar: str
    reading: str = ""
    meaning: str = ""
    image: str = ""
    examples: list[Example] = field(default_factory=list)

    @classmethod
    def from_target(
        cls,
        target: NoteTarget,
        image: str = "",
        examples: Optional[list[Example]] = None,
    ) -> "Note":
        """Build a note from listing data plus detail page results."""
        return cls(
            id=target.id,
            url=target.url,
            grammar=target.grammar,
            reading=target.reading,
            meaning=target.meaning,
            image=image,
            examples=list(examples or [])[:MAX_EXAMPLES],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "url": self.url,
            "grammar": self.grammar,
            "reading": self.reading,
            "meaning": self.meaning,
            "image": self.image,
            "examples": [e.to_dict() for e in self.examples],
        }

    def to_csv_row(self) -> list[str]:
        """
        Flatten into a fixed-width CSV row.

        Six note columns followed by four columns per example slot.
        Unused example slots are filled with empty strings so every
        row has the same width as the header.
        """
        example_fields = [""] * (MAX_EXAMPLES * 4)
        for i, example in enumerate(self.examples[:MAX_EXAMPLES]):
            example_fields[i * 4:(i + 1) * 4] = example.to_csv_fields()

        return [
            self.id,
            self.url,
            self.grammar,
            self.reading,
            self.meaning,
            self.image,
            *example_fields,
        ]
