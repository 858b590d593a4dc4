"""Tests for core models."""

import pytest

from jlpt_scraper.core.models import (
    Note,
    Example,
    NoteTarget,
    MAX_EXAMPLES,
)


@pytest.fixture
def target():
    return NoteTarget(
        id="12",
        url="https://jlptsensei.com/learn-japanese-grammar/ageku/",
        grammar="挙句",
        reading="あげく",
        meaning="in the end",
        page=2,
        position=5,
    )


class TestExample:
    """Tests for Example dataclass."""

    def test_to_dict(self):
        """Test to_dict keys and values."""
        example = Example(id="ex1", sentence="文", reading="ぶん", meaning="sentence")

        assert example.to_dict() == {
            "id": "ex1",
            "sentence": "文",
            "reading": "ぶん",
            "meaning": "sentence",
        }

    def test_csv_fields_order(self):
        """Test CSV fields are id, sentence, reading, meaning."""
        example = Example(id="ex1", sentence="a", reading="b", meaning="c")
        assert example.to_csv_fields() == ["ex1", "a", "b", "c"]


class TestNoteTarget:
    """Tests for NoteTarget dataclass."""

    def test_sort_key(self, target):
        """Test sort key is (page, position)."""
        assert target.sort_key == (2, 5)

    def test_defaults(self):
        """Test default page, position and metadata."""
        t = NoteTarget(id="1", url="https://jlptsensei.com/x/")

        assert t.page == 1
        assert t.position == 0
        assert t.metadata == {}


class TestNote:
    """Tests for Note dataclass."""

    def test_from_target_copies_listing_fields(self, target):
        """Test listing fields are carried over."""
        note = Note.from_target(target, image="https://jlptsensei.com/img.png")

        assert note.id == "12"
        assert note.url == target.url
        assert note.grammar == "挙句"
        assert note.reading == "あげく"
        assert note.meaning == "in the end"
        assert note.image == "https://jlptsensei.com/img.png"
        assert note.examples == []

    def test_from_target_caps_examples(self, target):
        """Test at most MAX_EXAMPLES examples are kept."""
        examples = [Example(id=f"ex{i}") for i in range(5)]
        note = Note.from_target(target, examples=examples)

        assert len(note.examples) == MAX_EXAMPLES
        assert [e.id for e in note.examples] == ["ex0", "ex1", "ex2"]

    def test_to_dict_shape(self, target):
        """Test JSON shape of a note."""
        note = Note.from_target(target, examples=[Example(id="ex1", sentence="s")])
        data = note.to_dict()

        assert list(data) == ["id", "url", "grammar", "reading", "meaning", "image", "examples"]
        assert data["examples"] == [
            {"id": "ex1", "sentence": "s", "reading": "", "meaning": ""}
        ]

    def test_to_dict_without_examples(self, target):
        """Test notes without examples serialize an empty list."""
        assert Note.from_target(target).to_dict()["examples"] == []

    def test_csv_row_width(self, target):
        """Test CSV row always has 18 columns."""
        assert len(Note.from_target(target).to_csv_row()) == 18

    def test_csv_row_pads_missing_examples(self, target):
        """Test unused example slots are empty strings."""
        note = Note.from_target(
            target,
            image="img.png",
            examples=[Example(id="ex1", sentence="a", reading="b", meaning="c")],
        )
        row = note.to_csv_row()

        assert row[:6] == ["12", target.url, "挙句", "あげく", "in the end", "img.png"]
        assert row[6:10] == ["ex1", "a", "b", "c"]
        assert row[10:] == [""] * 8
