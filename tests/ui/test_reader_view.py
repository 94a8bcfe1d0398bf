#!/usr/bin/env python3
"""
Tests for ReaderView - validates page rendering and scroll restoration.
"""

from PySide6.QtWidgets import QAbstractSlider, QApplication

from chapter_reader.ui import ReaderView


LONG_SEGMENTS = ["word " * 400] * 6


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


def settle():
    for _ in range(5):
        QApplication.processEvents()


def shown_view():
    view = ReaderView()
    view.resize(400, 300)
    view.show()
    settle()
    return view


def test_render_page_shows_khmer_page_label():
    """Page indicator should use Khmer digits and the buttons follow the bounds."""
    ensure_qt_app()

    view = ReaderView()
    view.render_page("Chapter", ["one", "two"], page_index=0, total_pages=12)

    assert view.page_label.text() == "ទំព័រ ១/១២"
    assert len(view._segment_labels) == 2
    assert not view.previous_button.isEnabled()
    assert view.next_button.isEnabled()


def test_saved_offset_is_applied_after_layout():
    """An offset beyond the stale scroll range should land once the page is laid out."""
    ensure_qt_app()
    view = shown_view()
    reported = []
    view.scrolled.connect(reported.append)

    view.render_page("Long", LONG_SEGMENTS, page_index=0, total_pages=1)
    view.scroll_to(500)
    settle()

    scroll_bar = view.scroll_area.verticalScrollBar()
    assert scroll_bar.maximum() >= 500
    assert scroll_bar.value() == 500
    assert not view.has_pending_scroll
    assert all(value == 500 for value in reported)


def test_unreachable_offset_is_not_reported():
    """A clamped restore should not be reported as the reader's own scroll."""
    ensure_qt_app()
    view = shown_view()
    reported = []
    view.scrolled.connect(reported.append)

    view.render_page("Short", ["tiny"], page_index=0, total_pages=1)
    view.scroll_to(100_000)
    settle()

    assert reported == []
    assert view.has_pending_scroll


def test_manual_scroll_cancels_pending_restore():
    """Scrolling by hand should drop the pending offset and report again."""
    ensure_qt_app()
    view = shown_view()
    view.render_page("Long", LONG_SEGMENTS, page_index=0, total_pages=1)
    view.scroll_to(100_000)
    settle()
    reported = []
    view.scrolled.connect(reported.append)

    scroll_bar = view.scroll_area.verticalScrollBar()
    scroll_bar.triggerAction(QAbstractSlider.SliderAction.SliderSingleStepSub)

    assert not view.has_pending_scroll
    assert reported == [scroll_bar.value()]
