"""
Chapter Reader - A paginated reader for long-form, mixed-script chapters.

This package provides a desktop application for reading chapter text with:
- Character-budget pagination with script-aware break points
- Per-chapter reading progress (page and scroll offset)
- Continue-reading across a whole book
"""

__version__ = "0.1.0"

# Make key components available at package level
from chapter_reader.core import Book, Chapter, Location, paginate, split_paragraph_into_chunks
from chapter_reader.io import BookIngestor
from chapter_reader.services import ReadingPositionStore

__all__ = [
    "Book",
    "Chapter",
    "Location",
    "paginate",
    "split_paragraph_into_chunks",
    "BookIngestor",
    "ReadingPositionStore",
]
