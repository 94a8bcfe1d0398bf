"""Scroll save throttle - coalesces scroll events into one save per frame."""

import logging
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Slot

from chapter_reader.services import ReadingPositionStore

logger = logging.getLogger(__name__)

# One frame at 60 Hz.
FRAME_INTERVAL_MS = 16

ChapterKey = Tuple[str, str]


class ScrollSaveThrottle(QObject):
    """
    Persists scroll offsets at most once per frame interval.

    The (book, chapter) pair is captured when a save is scheduled and compared
    with the active pair when the timer fires, so a save scheduled for one
    chapter is dropped rather than written after a switch to another.

    A pending save that is cancelled on a chapter switch is lost; callers
    flush() on shutdown to keep the last offset of the open chapter.
    """

    def __init__(
        self,
        store: ReadingPositionStore,
        active_key: Callable[[], Optional[ChapterKey]],
        interval_ms: int = FRAME_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._active_key = active_key
        self._pending: Optional[Tuple[ChapterKey, int]] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._commit)

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, book_id: str, chapter_id: str, scroll_top: int) -> None:
        """Queue a scroll offset; later offsets in the same frame replace it."""
        self._pending = ((book_id, chapter_id), scroll_top)
        if not self._timer.isActive():
            self._timer.start()

    def cancel(self) -> None:
        """Drop any pending save."""
        self._timer.stop()
        self._pending = None

    def flush(self) -> None:
        """Commit a pending save immediately."""
        self._timer.stop()
        self._commit()

    @Slot()
    def _commit(self) -> None:
        if self._pending is None:
            return
        key, scroll_top = self._pending
        self._pending = None

        if key != self._active_key():
            logger.debug("Dropping scroll save for inactive chapter %s:%s", *key)
            return
        self._store.save_location(key[0], key[1], scroll_top)
