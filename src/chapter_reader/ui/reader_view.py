"""Reader view - shows one page of chapter text with page navigation."""

from typing import List, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from chapter_reader.services import to_khmer_number


class ReaderView(QWidget):
    """Renders the segments of the current page and reports navigation.

    Signals:
        scrolled: Emitted with the vertical scroll offset in pixels.
        next_requested: Emitted when the next-page button is pressed.
        previous_requested: Emitted when the previous-page button is pressed.
        page_jump_requested: Emitted with a 1-indexed page number to jump to.
    """

    scrolled = Signal(int)
    next_requested = Signal()
    previous_requested = Signal()
    page_jump_requested = Signal(int)

    SEGMENT_SPACING = 20

    def __init__(self, parent=None):
        super().__init__(parent)
        self._font_size = 16
        self._segment_labels: List[QLabel] = []
        # Offset waiting for the new page to be laid out tall enough.
        self._pending_scroll: Optional[int] = None

        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # Header: chapter title, page indicator and jump box
        header = QHBoxLayout()
        header.setContentsMargins(16, 8, 16, 8)
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-weight: 600;")
        self.page_label = QLabel()
        self.page_input = QSpinBox()
        self.page_input.setMinimum(1)
        self.page_input.setMaximum(1)
        self.go_button = QPushButton("ទៅ")
        self.go_button.clicked.connect(self._on_go_clicked)
        header.addWidget(self.title_label, 1)
        header.addWidget(self.page_label)
        header.addWidget(self.page_input)
        header.addWidget(self.go_button)
        layout.addLayout(header)

        # Body: scrollable page text
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.content = QWidget()
        self.content_layout = QVBoxLayout(self.content)
        self.content_layout.setContentsMargins(40, 20, 40, 20)
        self.content_layout.setSpacing(self.SEGMENT_SPACING)
        self.content_layout.addStretch(1)
        self.scroll_area.setWidget(self.content)
        scroll_bar = self.scroll_area.verticalScrollBar()
        scroll_bar.valueChanged.connect(self._on_scroll_value_changed)
        scroll_bar.rangeChanged.connect(self._on_scroll_range_changed)
        scroll_bar.actionTriggered.connect(self._on_scroll_action)
        layout.addWidget(self.scroll_area, 1)

        # Footer: previous / next
        footer = QHBoxLayout()
        footer.setContentsMargins(16, 8, 16, 8)
        self.previous_button = QPushButton("‹ ថយ")
        self.previous_button.clicked.connect(self.previous_requested.emit)
        self.footer_label = QLabel()
        self.footer_label.setAlignment(Qt.AlignCenter)
        self.next_button = QPushButton("បន្ទាប់ ›")
        self.next_button.clicked.connect(self.next_requested.emit)
        footer.addWidget(self.previous_button)
        footer.addWidget(self.footer_label, 1)
        footer.addWidget(self.next_button)
        layout.addLayout(footer)

    def render_page(self, title: str, segments: List[str], page_index: int, total_pages: int):
        """Replace the displayed text with the given page's segments."""
        for label in self._segment_labels:
            self.content_layout.removeWidget(label)
            label.deleteLater()
        self._segment_labels = []

        for position, segment in enumerate(segments):
            label = QLabel(segment)
            label.setWordWrap(True)
            label.setTextFormat(Qt.PlainText)
            label.setTextInteractionFlags(Qt.TextSelectableByMouse)
            self._apply_font(label)
            self.content_layout.insertWidget(position, label)
            self._segment_labels.append(label)

        page_number = page_index + 1
        self.title_label.setText(title)
        self.page_label.setText(
            f"ទំព័រ {to_khmer_number(page_number)}/{to_khmer_number(total_pages)}"
        )
        self.footer_label.setText(
            f"{to_khmer_number(page_number)} / {to_khmer_number(total_pages)}"
        )
        self.page_input.setMaximum(total_pages)
        self.page_input.setValue(page_number)
        self.previous_button.setEnabled(page_index > 0)
        self.next_button.setEnabled(page_index < total_pages - 1)

    def scroll_to(self, scroll_top: int):
        """
        Scroll the page to a vertical offset.

        A freshly rendered page is laid out later by the event loop, so an
        offset past the current scroll range is kept pending and applied once
        the range grows to fit it. Scroll reports are held back meanwhile so a
        temporarily clamped value is never reported as the reader's position.
        """
        scroll_bar = self.scroll_area.verticalScrollBar()
        self._pending_scroll = None
        if scroll_top > scroll_bar.maximum():
            self._pending_scroll = scroll_top
        scroll_bar.setValue(scroll_top)

    @property
    def has_pending_scroll(self) -> bool:
        return self._pending_scroll is not None

    @Slot(int)
    def _on_scroll_value_changed(self, value: int):
        if self._pending_scroll is None:
            self.scrolled.emit(value)

    @Slot(int, int)
    def _on_scroll_range_changed(self, minimum: int, maximum: int):
        if self._pending_scroll is None:
            return
        scroll_bar = self.scroll_area.verticalScrollBar()
        scroll_bar.setValue(min(self._pending_scroll, maximum))
        if maximum >= self._pending_scroll:
            self._pending_scroll = None

    @Slot(int)
    def _on_scroll_action(self, action: int):
        # The reader scrolled by hand; stop waiting for the restore.
        self._pending_scroll = None

    def set_font_size(self, size: int):
        self._font_size = size
        for label in self._segment_labels:
            self._apply_font(label)

    def _apply_font(self, label: QLabel):
        font = label.font()
        font.setPixelSize(self._font_size)
        label.setFont(font)

    def _on_go_clicked(self):
        self.page_jump_requested.emit(self.page_input.value())
