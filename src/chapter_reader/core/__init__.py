"""Domain layer - Pure entities and the pagination engine."""

from .book import Book, Chapter
from .pagination import (
    DEFAULT_CHARS_PER_PAGE,
    SOFT_BREAK_CHARACTERS,
    clamp_page_index,
    normalize_line_endings,
    paginate,
    split_paragraph_into_chunks,
)
from .reading_location import ContinueTarget, CurrentPosition, Location, location_key

__all__ = [
    "Book",
    "Chapter",
    "DEFAULT_CHARS_PER_PAGE",
    "SOFT_BREAK_CHARACTERS",
    "clamp_page_index",
    "normalize_line_endings",
    "paginate",
    "split_paragraph_into_chunks",
    "ContinueTarget",
    "CurrentPosition",
    "Location",
    "location_key",
]
