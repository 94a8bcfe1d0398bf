"""Book and Chapter entities - chapter content as supplied by the content provider."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Chapter:
    """A chapter and its raw paragraph content."""

    id: str
    title: str
    content: List[str] = field(default_factory=list)


@dataclass
class Book:
    """Acts as the authoritative expert on a book's table of contents."""

    id: str
    title: str
    chapters: List[Chapter] = field(default_factory=list)

    @property
    def total_chapters(self) -> int:
        """Returns the number of chapters in this book."""
        return len(self.chapters)

    @property
    def first_chapter(self) -> Optional[Chapter]:
        return self.chapters[0] if self.chapters else None

    def find_chapter(self, chapter_id: str) -> Optional[Chapter]:
        """Return the chapter with the given id, or None."""
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def get_chapter(self, chapter_id: str) -> Chapter:
        """Retrieve a chapter by id.

        Raises:
            ValueError: if no chapter has that id.
        """
        chapter = self.find_chapter(chapter_id)
        if chapter is None:
            raise ValueError(f"Chapter '{chapter_id}' not found in book '{self.title}'")
        return chapter

    def add_chapter(self, chapter: Chapter) -> None:
        """Add a chapter to this book."""
        self.chapters.append(chapter)
