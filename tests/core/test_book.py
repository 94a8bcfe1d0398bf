"""Unit tests for domain entities."""

import pytest

from chapter_reader.core import Book, Chapter, CurrentPosition, Location, location_key


@pytest.fixture
def book():
    return Book(
        id="b1",
        title="Guide",
        chapters=[
            Chapter(id="c1", title="One", content=["text"]),
            Chapter(id="c2", title="Two", content=["", "   "]),
        ],
    )


class TestBook:
    """Tests for Book chapter lookup."""

    def test_total_chapters(self, book):
        assert book.total_chapters == 2

    def test_first_chapter(self, book):
        assert book.first_chapter.id == "c1"

    def test_first_chapter_of_empty_book_is_none(self):
        assert Book(id="b0", title="Empty").first_chapter is None

    def test_find_chapter_returns_none_for_unknown_id(self, book):
        assert book.find_chapter("missing") is None

    def test_get_chapter_raises_for_unknown_id(self, book):
        with pytest.raises(ValueError, match="Chapter 'missing' not found"):
            book.get_chapter("missing")

    def test_add_chapter(self, book):
        book.add_chapter(Chapter(id="c3", title="Three"))
        assert book.get_chapter("c3").content == []


class TestReadingLocation:
    """Tests for location keys and position matching."""

    def test_location_key_format(self):
        assert location_key("b1", "c1") == "b1:c1"

    def test_location_key_property(self):
        assert Location(book_id="b1", chapter_id="c9").key == "b1:c9"

    def test_current_position_refers_to_pair(self):
        position = CurrentPosition(book_id="b1", chapter_id="c1")
        assert position.refers_to("b1", "c1")
        assert not position.refers_to("b1", "c2")

    def test_empty_position_refers_to_nothing(self):
        assert not CurrentPosition().refers_to("b1", "c1")
