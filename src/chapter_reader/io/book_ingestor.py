"""Book Ingestor - parses book JSON files into Book entities."""

import json
import logging
from pathlib import Path
from typing import Optional

from chapter_reader.core import Book, Chapter

logger = logging.getLogger(__name__)


class BookIngestor:
    """Data Factory responsible for parsing book JSON files.

    Expected layout:
    {
        "id": "b1",
        "title": "...",
        "chapters": [
            {"id": "c1", "title": "...", "content": ["paragraph", "..."]}
        ]
    }
    """

    BOOK_FILENAME = "book.json"

    def ingest_book(self, book_path: Path) -> Optional[Book]:
        """
        Parse a book file (or a directory holding ``book.json``) into a Book.

        Args:
            book_path: Path to the JSON file or to its directory

        Returns:
            Book object if successful, None if parsing fails
        """
        book_path = Path(book_path)
        if book_path.is_dir():
            book_path = book_path / self.BOOK_FILENAME

        try:
            with open(book_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Error ingesting book %s: %s", book_path, e)
            return None

        if not isinstance(data, dict):
            logger.error("Error ingesting book %s: top level is not an object", book_path)
            return None

        book = Book(
            id=str(data.get("id") or book_path.stem),
            title=data.get("title") or book_path.stem,
        )

        for index, chapter_data in enumerate(data.get("chapters", [])):
            chapter = self._parse_chapter(index, chapter_data)
            if chapter:
                book.add_chapter(chapter)

        return book

    def _parse_chapter(self, index: int, chapter_data: dict) -> Optional[Chapter]:
        """
        Parse a single chapter entry.

        Args:
            index: Position of the chapter in the book
            chapter_data: Dictionary containing chapter information

        Returns:
            Chapter object if successful, None otherwise
        """
        if not isinstance(chapter_data, dict):
            logger.warning("Skipping chapter %d: not an object", index)
            return None

        chapter_id = chapter_data.get("id")
        if chapter_id is None:
            logger.warning("Skipping chapter %d: missing id", index)
            return None

        content = chapter_data.get("content", [])
        if isinstance(content, str):
            content = [content]
        paragraphs = [part for part in content if isinstance(part, str)]

        return Chapter(
            id=str(chapter_id),
            title=chapter_data.get("title") or f"Chapter {index + 1}",
            content=paragraphs,
        )
