"""Reading position entities - saved per-chapter progress and the active pointer."""

from dataclasses import dataclass
from typing import Optional


def location_key(book_id: str, chapter_id: str) -> str:
    """Return the composite key a Location is stored under."""
    return f"{book_id}:{chapter_id}"


@dataclass
class Location:
    """Saved progress for one (book, chapter) pair.

    Attributes:
        book_id: Identifier of the book.
        chapter_id: Identifier of the chapter inside the book.
        scroll_top: Vertical scroll offset of the page view, in pixels.
        page: 0-indexed page number; clamp against the live page count on read.
        updated_at: Epoch milliseconds of the last update.
    """

    book_id: str
    chapter_id: str
    scroll_top: int = 0
    page: int = 0
    updated_at: int = 0

    @property
    def key(self) -> str:
        return location_key(self.book_id, self.chapter_id)


@dataclass
class CurrentPosition:
    """Snapshot of the chapter that is active right now."""

    book_id: Optional[str] = None
    chapter_id: Optional[str] = None
    page: int = 0
    scroll_top: int = 0
    updated_at: Optional[int] = None

    def refers_to(self, book_id: str, chapter_id: str) -> bool:
        return self.book_id == book_id and self.chapter_id == chapter_id


@dataclass(frozen=True)
class ContinueTarget:
    """Where to resume a book that is reopened without a chapter selection."""

    chapter_id: str
    page: int = 0
    scroll_top: int = 0
