#!/usr/bin/env python3
"""
Integration tests for a reading session - full workflow validation.

Tests the complete user journey across an application restart:
1. Open book → first chapter, first page
2. Page forward and scroll → progress written to disk
3. Switch chapter → previous chapter's progress kept
4. Restart → continue reading resumes the last chapter and page
5. Smaller page budget → stale page clamped on restore
"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from chapter_reader.coordinators import ReaderController
from chapter_reader.io import BookIngestor, JsonFileProgressStorage
from chapter_reader.services import ReadingPositionStore


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


@pytest.fixture
def book_file(tmp_path):
    """Write a two-chapter Khmer/English book to disk."""
    sentence = "ព្រះអាទិត្យរះនៅពេលព្រឹក។ "
    data = {
        "id": "kh-book",
        "title": "សៀវភៅ",
        "chapters": [
            {"id": "ch1", "title": "ជំពូក ១", "content": [sentence * 20, sentence * 20]},
            {"id": "ch2", "title": "Chapter 2", "content": ["Plain text.\n\nAnother paragraph."]},
        ],
    }
    path = tmp_path / "book.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def progress_path(tmp_path):
    return tmp_path / "state" / "progress.json"


def start_session(progress_path: Path, chars_per_page: int) -> ReaderController:
    """Build a controller the way main() does, with mocked widgets."""
    ensure_qt_app()
    storage = JsonFileProgressStorage(progress_path, version=ReadingPositionStore.SCHEMA_VERSION)
    return ReaderController(
        main_window=MagicMock(),
        reader_view=MagicMock(),
        ingestor=BookIngestor(),
        position_store=ReadingPositionStore(storage),
        chars_per_page=chars_per_page,
    )


def test_progress_survives_restart(book_file, progress_path):
    """Reading position should be restored after restarting the application."""
    session = start_session(progress_path, chars_per_page=300)
    session.handle_book_opened(book_file)
    assert session.current_chapter.id == "ch1"
    assert session.total_pages > 2

    session.next_page()
    session.next_page()
    session.handle_scroll(75)
    session.shutdown()

    saved = json.loads(progress_path.read_text(encoding="utf-8"))
    assert saved["version"] == ReadingPositionStore.SCHEMA_VERSION
    assert saved["state"]["locations"]["kh-book:ch1"]["page"] == 2
    assert saved["state"]["locations"]["kh-book:ch1"]["scroll_top"] == 75

    restarted = start_session(progress_path, chars_per_page=300)
    restarted.handle_book_opened(book_file)

    assert restarted.current_chapter.id == "ch1"
    assert restarted.current_page_index == 2
    restarted.reader_view.scroll_to.assert_called_with(75)


def test_chapter_switch_then_restart_resumes_latest_chapter(book_file, progress_path):
    """Continue reading should land on the chapter opened last."""
    session = start_session(progress_path, chars_per_page=300)
    session.handle_book_opened(book_file)
    session.next_page()
    session.open_chapter("ch2")
    session.shutdown()

    restarted = start_session(progress_path, chars_per_page=300)
    restarted.handle_book_opened(book_file)

    assert restarted.current_chapter.id == "ch2"
    assert restarted.pages == [["Plain text.", "Another paragraph."]]
    assert restarted.position_store.get_location("kh-book", "ch1").page == 1


def test_larger_budget_on_restart_clamps_saved_page(book_file, progress_path):
    """A saved page beyond the new page count should be clamped, not crash."""
    session = start_session(progress_path, chars_per_page=100)
    session.handle_book_opened(book_file)
    session.jump_to_page(session.total_pages)
    last_index = session.current_page_index
    assert last_index > 0
    session.shutdown()

    restarted = start_session(progress_path, chars_per_page=5000)
    restarted.handle_book_opened(book_file)

    assert restarted.total_pages == 1
    assert restarted.current_page_index == 0


def test_corrupt_progress_file_starts_fresh(book_file, progress_path):
    """A damaged progress file should be ignored."""
    progress_path.parent.mkdir(parents=True)
    progress_path.write_text("{broken", encoding="utf-8")

    session = start_session(progress_path, chars_per_page=300)
    session.handle_book_opened(book_file)

    assert session.current_chapter.id == "ch1"
    assert session.current_page_index == 0
