"""Reading position store - tracks per-chapter progress and the active chapter."""

import logging
import time
from dataclasses import asdict
from typing import Any, Callable, Dict, Optional

from chapter_reader.core import ContinueTarget, CurrentPosition, Location, location_key
from chapter_reader.io import ProgressStorage

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ReadingPositionStore:
    """
    State container for reading progress.

    Holds one Location per (book, chapter) pair plus a CurrentPosition used to
    answer "continue reading" quickly. Every mutating operation ends with an
    explicit persist through the injected ProgressStorage.

    Lookups for unknown pairs return None; storage failures are logged and
    never propagate, since reading progress is a convenience feature.
    """

    SCHEMA_VERSION = 3
    DEFAULT_FONT_SIZE = 16
    MIN_FONT_SIZE = 10
    MAX_FONT_SIZE = 40

    def __init__(self, storage: ProgressStorage, clock: Optional[Callable[[], int]] = None):
        """
        Initialize the store and rehydrate any persisted snapshot.

        Args:
            storage: Backend the snapshot is read from and written to.
            clock: Returns the current time in epoch milliseconds.
        """
        self._storage = storage
        self._clock = clock or _now_ms

        self._current_book_id: Optional[str] = None
        self._current_chapter_id: Optional[str] = None
        self._current_position = CurrentPosition()
        self._locations: Dict[str, Location] = {}
        self._font_size = self.DEFAULT_FONT_SIZE

        self._restore()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def current_book_id(self) -> Optional[str]:
        return self._current_book_id

    @property
    def current_chapter_id(self) -> Optional[str]:
        return self._current_chapter_id

    @property
    def current_position(self) -> CurrentPosition:
        return CurrentPosition(**asdict(self._current_position))

    @property
    def font_size(self) -> int:
        return self._font_size

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_current(self, book_id: str, chapter_id: str) -> None:
        """Mark a chapter as active, seeding the position from its saved Location."""
        existing = self._locations.get(location_key(book_id, chapter_id))
        self._current_book_id = book_id
        self._current_chapter_id = chapter_id
        self._current_position = CurrentPosition(
            book_id=book_id,
            chapter_id=chapter_id,
            page=existing.page if existing else 0,
            scroll_top=existing.scroll_top if existing else 0,
            updated_at=self._clock(),
        )
        self._persist()

    def save_location(self, book_id: str, chapter_id: str, scroll_top: int) -> None:
        """Record a scroll offset, keeping the chapter's saved page."""
        previous = self._locations.get(location_key(book_id, chapter_id))
        location = Location(
            book_id=book_id,
            chapter_id=chapter_id,
            scroll_top=scroll_top,
            page=previous.page if previous else 0,
            updated_at=self._clock(),
        )
        self._locations[location.key] = location

        if self._current_position.refers_to(book_id, chapter_id):
            self._mirror(location)
        self._persist()

    def save_page(self, book_id: str, chapter_id: str, page: int) -> None:
        """Record a page index, keeping the chapter's saved scroll offset."""
        previous = self._locations.get(location_key(book_id, chapter_id))
        location = Location(
            book_id=book_id,
            chapter_id=chapter_id,
            scroll_top=previous.scroll_top if previous else 0,
            page=page,
            updated_at=self._clock(),
        )
        self._locations[location.key] = location

        # Page changes always come from the chapter on screen.
        self._mirror(location)
        self._persist()

    def get_location(self, book_id: str, chapter_id: str) -> Optional[Location]:
        """Return the saved Location for a pair, or None if it was never visited."""
        location = self._locations.get(location_key(book_id, chapter_id))
        if location is None:
            return None
        return Location(**asdict(location))

    def continue_book(self, book_id: str, fallback_chapter_id: str) -> ContinueTarget:
        """
        Resolve where to resume a book.

        The active position wins when it belongs to this book. Otherwise the
        most recently updated Location of the book is used, and with no saved
        progress at all the fallback chapter is opened at its first page.
        """
        current = self._current_position
        if current.book_id == book_id and current.chapter_id:
            return ContinueTarget(
                chapter_id=current.chapter_id,
                page=current.page,
                scroll_top=current.scroll_top,
            )

        entries = [loc for loc in self._locations.values() if loc.book_id == book_id]
        if not entries:
            return ContinueTarget(chapter_id=fallback_chapter_id)

        latest = max(entries, key=lambda loc: loc.updated_at)
        return ContinueTarget(
            chapter_id=latest.chapter_id,
            page=latest.page,
            scroll_top=latest.scroll_top,
        )

    def clear_progress(self, book_id: Optional[str] = None) -> None:
        """
        Forget saved progress.

        Args:
            book_id: Only forget this book's Locations. When omitted, every
                Location is removed and the active position is reset.
        """
        if book_id is None:
            self._locations = {}
            self._current_position = CurrentPosition()
        else:
            self._locations = {
                key: loc for key, loc in self._locations.items() if loc.book_id != book_id
            }
            if self._current_position.book_id == book_id:
                self._current_position = CurrentPosition()
        self._persist()

    def set_font_size(self, size: int) -> int:
        """Store the reading font size, clamped to the supported range."""
        self._font_size = max(self.MIN_FONT_SIZE, min(int(size), self.MAX_FONT_SIZE))
        self._persist()
        return self._font_size

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Return the persistable state as plain data."""
        return {
            "current_book_id": self._current_book_id,
            "current_chapter_id": self._current_chapter_id,
            "current_position": asdict(self._current_position),
            "locations": {key: asdict(loc) for key, loc in self._locations.items()},
            "font_size": self._font_size,
        }

    def _mirror(self, location: Location) -> None:
        self._current_position = CurrentPosition(
            book_id=location.book_id,
            chapter_id=location.chapter_id,
            page=location.page,
            scroll_top=location.scroll_top,
            updated_at=location.updated_at,
        )

    def _persist(self) -> None:
        try:
            self._storage.save(self.snapshot())
        except OSError as e:
            logger.warning("Failed to persist reading progress: %s", e)

    def _restore(self) -> None:
        try:
            state = self._storage.load()
        except OSError as e:
            logger.warning("Failed to load reading progress: %s", e)
            return
        if not state:
            return

        try:
            restored = [
                Location(
                    book_id=str(raw["book_id"]),
                    chapter_id=str(raw["chapter_id"]),
                    scroll_top=int(raw.get("scroll_top", 0)),
                    page=int(raw.get("page", 0)),
                    updated_at=int(raw.get("updated_at", 0)),
                )
                for raw in state.get("locations", {}).values()
            ]
            locations = {location.key: location for location in restored}
            current = CurrentPosition(**state.get("current_position") or {})
            font_size = int(state.get("font_size", self.DEFAULT_FONT_SIZE))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed reading progress: %s", e)
            return

        self._locations = locations
        self._current_position = current
        self._current_book_id = state.get("current_book_id")
        self._current_chapter_id = state.get("current_chapter_id")
        self._font_size = max(self.MIN_FONT_SIZE, min(font_size, self.MAX_FONT_SIZE))
        logger.debug("Restored %d saved locations", len(self._locations))
