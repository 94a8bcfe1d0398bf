"""Reader Controller - Central coordinator for the reading session."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PySide6.QtCore import QObject, Slot

from chapter_reader.core import Book, Chapter, DEFAULT_CHARS_PER_PAGE, clamp_page_index, paginate
from chapter_reader.io import BookIngestor
from chapter_reader.services import ReadingPositionStore, split_paragraphs
from chapter_reader.ui import MainWindow, ReaderView
from chapter_reader.coordinators.scroll_throttle import ScrollSaveThrottle

logger = logging.getLogger(__name__)


class ReaderController(QObject):
    """
    Central Nervous System of the application.
    Owns the live session state (book, chapter, page array, page index),
    re-paginates on content changes and keeps the position store in sync.
    """

    def __init__(
        self,
        main_window: MainWindow,
        reader_view: ReaderView,
        ingestor: BookIngestor,
        position_store: ReadingPositionStore,
        chars_per_page: int = DEFAULT_CHARS_PER_PAGE,
    ):
        super().__init__()

        self.main_window = main_window
        self.reader_view = reader_view
        self.ingestor = ingestor
        self.position_store = position_store
        self.chars_per_page = max(1, chars_per_page)

        # Session state
        self.current_book: Book | None = None
        self.current_chapter: Chapter | None = None
        self.pages: List[List[str]] = [[]]
        self.current_page_index: int = 0

        self.scroll_throttle = ScrollSaveThrottle(position_store, self.active_key, parent=self)

    @property
    def total_pages(self) -> int:
        return max(1, len(self.pages))

    def active_key(self) -> Optional[Tuple[str, str]]:
        """Return the (book, chapter) pair on screen, if any."""
        if self.current_book is None or self.current_chapter is None:
            return None
        return (self.current_book.id, self.current_chapter.id)

    # ------------------------------------------------------------------
    # Book and chapter lifecycle
    # ------------------------------------------------------------------

    @Slot(Path)
    def handle_book_opened(self, book_path: Path):
        """
        Handle when user selects a book file.

        Args:
            book_path: Path to the book JSON file or its directory
        """
        book = self.ingestor.ingest_book(book_path)

        if book is None:
            self.main_window.show_error(
                "Book Load Error",
                f"Failed to load book from:\n{book_path}"
            )
            return

        if book.total_chapters == 0:
            self.main_window.show_error(
                "Empty Book",
                f"No chapters found in:\n{book_path}"
            )
            return

        self.open_book(book)

    def open_book(self, book: Book):
        """Make a book current and resume it where the reader left off."""
        if book.first_chapter is None:
            self.main_window.show_error("Empty Book", f"{book.title} has no chapters")
            return

        self.scroll_throttle.flush()
        self.current_book = book
        self.current_chapter = None
        self.main_window.set_book(book)
        self.continue_reading()

    @Slot()
    def continue_reading(self):
        """Open the chapter and page resolved by the position store."""
        if self.current_book is None:
            return

        fallback = self.current_book.first_chapter
        target = self.position_store.continue_book(self.current_book.id, fallback.id)
        if self.current_book.find_chapter(target.chapter_id) is None:
            logger.info(
                "Saved chapter %s is no longer in book %s, starting from the first chapter",
                target.chapter_id,
                self.current_book.id,
            )
            target_id = fallback.id
        else:
            target_id = target.chapter_id

        self.open_chapter(target_id)

    @Slot(str)
    def open_chapter(self, chapter_id: str):
        """
        Switch to a chapter, restoring its saved page and scroll offset.

        Args:
            chapter_id: Identifier of the chapter inside the current book
        """
        if self.current_book is None:
            return

        chapter = self.current_book.find_chapter(chapter_id)
        if chapter is None:
            self.main_window.show_error(
                "Chapter Not Found",
                f"Chapter '{chapter_id}' is not part of {self.current_book.title}"
            )
            return

        # Never let a queued scroll for the old chapter land after the switch.
        self.scroll_throttle.cancel()

        self.current_chapter = chapter
        self.position_store.set_current(self.current_book.id, chapter.id)
        self.main_window.set_active_chapter(chapter.id)
        self.recompute_pages()

        saved = self.position_store.get_location(self.current_book.id, chapter.id)
        page = saved.page if saved else 0
        scroll_top = saved.scroll_top if saved else 0

        self.current_page_index = clamp_page_index(page, len(self.pages))
        self.position_store.save_page(self.current_book.id, chapter.id, self.current_page_index)
        self._render_current_page(scroll_top=scroll_top)

    def recompute_pages(self):
        """Re-run pagination for the current chapter content."""
        if self.current_chapter is None:
            self.pages = [[]]
            return

        paragraphs = split_paragraphs(self.current_chapter.content)
        self.pages = paginate(paragraphs, self.chars_per_page)
        self.current_page_index = clamp_page_index(self.current_page_index, len(self.pages))
        logger.debug(
            "Paginated chapter %s: %d paragraphs into %d pages",
            self.current_chapter.id,
            len(paragraphs),
            len(self.pages),
        )

    def reload_chapter_content(self, content: List[str]):
        """Replace the open chapter's content and re-paginate it."""
        if self.current_chapter is None:
            return

        self.current_chapter.content = list(content)
        self.recompute_pages()
        self._save_current_page()
        self._render_current_page()

    def set_chars_per_page(self, budget: int):
        """Change the page budget and re-paginate the open chapter."""
        self.chars_per_page = max(1, budget)
        if self.current_chapter is None:
            return

        self.recompute_pages()
        self._save_current_page()
        self._render_current_page()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @Slot()
    def next_page(self):
        """Navigate to the next page."""
        if self.current_chapter is None:
            return

        if self.current_page_index < self.total_pages - 1:
            self._go_to_page(self.current_page_index + 1)

    @Slot()
    def previous_page(self):
        """Navigate to the previous page."""
        if self.current_chapter is None:
            return

        if self.current_page_index > 0:
            self._go_to_page(self.current_page_index - 1)

    @Slot(int)
    def jump_to_page(self, page_number: int):
        """
        Jump to a specific page.

        Args:
            page_number: The page number to jump to (1-indexed, clamped to
                the chapter's page count; invalid numbers mean page 1)
        """
        if self.current_chapter is None:
            return

        clamped = min(max(1, page_number or 1), self.total_pages)
        self._go_to_page(clamped - 1)

    @Slot(int)
    def handle_scroll(self, scroll_top: int):
        """Queue a scroll offset save for the chapter on screen."""
        key = self.active_key()
        if key is None:
            return
        self.scroll_throttle.schedule(key[0], key[1], scroll_top)

    # ------------------------------------------------------------------
    # Preferences and progress
    # ------------------------------------------------------------------

    @Slot(int)
    def handle_font_size_changed(self, size: int):
        applied = self.position_store.set_font_size(size)
        self.reader_view.set_font_size(applied)
        self.main_window.set_font_size(applied)

    @Slot()
    def handle_clear_progress(self):
        """Forget saved progress for the current book."""
        if self.current_book is None:
            return

        self.scroll_throttle.cancel()
        self.position_store.clear_progress(self.current_book.id)
        self.main_window.show_info(
            "Progress Cleared",
            f"Reading progress for {self.current_book.title} was reset."
        )

    @Slot()
    def shutdown(self):
        """Write out anything still queued before the application exits."""
        self.scroll_throttle.flush()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _go_to_page(self, index: int):
        self.scroll_throttle.cancel()
        self.current_page_index = clamp_page_index(index, self.total_pages)
        self._save_current_page()
        self._render_current_page()

    def _save_current_page(self):
        key = self.active_key()
        if key is None:
            return
        self.position_store.save_page(key[0], key[1], self.current_page_index)

    def _render_current_page(self, scroll_top: int = 0):
        """Render the current page to the reader view."""
        if self.current_chapter is None:
            return

        index = clamp_page_index(self.current_page_index, len(self.pages))
        segments = self.pages[index] if self.pages else []
        self.reader_view.render_page(
            title=self.current_chapter.title,
            segments=segments,
            page_index=index,
            total_pages=self.total_pages,
        )
        self.reader_view.scroll_to(scroll_top)
