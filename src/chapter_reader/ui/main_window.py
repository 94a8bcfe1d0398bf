"""Main Window - Application shell with menus and toolbar."""

from pathlib import Path
from typing import Optional, override

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent, QKeyEvent
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QVBoxLayout, QWidget

from chapter_reader.core import Book


class MainWindow(QMainWindow):
    """Provides the application shell, menus, and keyboard shortcut handling."""

    # Signal emitted when user selects a book file
    book_opened = Signal(Path)
    # Signal emitted with the id of a chapter picked from the Chapters menu
    chapter_selected = Signal(str)
    continue_requested = Signal()
    clear_progress_requested = Signal()
    font_size_changed = Signal(int)
    # Signals for page navigation
    next_page = Signal()
    previous_page = Signal()
    # Signal emitted right before the window closes
    closing = Signal()

    FONT_SIZE_STEP = 2

    def __init__(self, books_dir: Optional[Path] = None):
        super().__init__()
        self.setWindowTitle("Chapter Reader")
        self.setGeometry(100, 100, 900, 800)

        self._books_dir = books_dir
        self._font_size = 16
        self._chapter_actions: dict[str, QAction] = {}

        self._setup_ui()
        self._create_menu_bar()

    def _setup_ui(self):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        menu_bar = self.menuBar()

        # File menu
        file_menu = menu_bar.addMenu("&File")

        open_action = QAction("&Open Book...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._on_open_book)
        file_menu.addAction(open_action)

        continue_action = QAction("&Continue Reading", self)
        continue_action.triggered.connect(self.continue_requested.emit)
        file_menu.addAction(continue_action)

        clear_action = QAction("Clear &Progress", self)
        clear_action.triggered.connect(self.clear_progress_requested.emit)
        file_menu.addAction(clear_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Chapters menu, filled when a book is opened
        self.chapters_menu = menu_bar.addMenu("&Chapters")
        self._chapter_group = QActionGroup(self)
        self._chapter_group.setExclusive(True)

        # View menu
        view_menu = menu_bar.addMenu("&View")

        larger_action = QAction("&Larger Text", self)
        larger_action.setShortcut("Ctrl+=")
        larger_action.triggered.connect(lambda: self._on_font_step(self.FONT_SIZE_STEP))
        view_menu.addAction(larger_action)

        smaller_action = QAction("&Smaller Text", self)
        smaller_action.setShortcut("Ctrl+-")
        smaller_action.triggered.connect(lambda: self._on_font_step(-self.FONT_SIZE_STEP))
        view_menu.addAction(smaller_action)

    def _on_font_step(self, delta: int):
        self.font_size_changed.emit(self._font_size + delta)

    def _on_open_book(self):
        """Handle the Open Book menu action."""
        start_dir = self._books_dir if self._books_dir else Path.home()
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Book File",
            str(start_dir),
            "Book files (*.json)"
        )

        if file_path:
            self.book_opened.emit(Path(file_path))

    def set_reader_view(self, reader_view):
        """Set the reader view widget in the main layout."""
        self.main_layout.addWidget(reader_view)

    def set_font_size(self, size: int):
        self._font_size = size

    def set_book(self, book: Book):
        """Rebuild the Chapters menu for a newly opened book."""
        self.setWindowTitle(f"{book.title} - Chapter Reader")
        self.chapters_menu.clear()
        for action in self._chapter_actions.values():
            self._chapter_group.removeAction(action)
        self._chapter_actions = {}

        for chapter in book.chapters:
            action = QAction(chapter.title, self)
            action.setCheckable(True)
            action.triggered.connect(
                lambda checked=False, chapter_id=chapter.id: self.chapter_selected.emit(chapter_id)
            )
            self._chapter_group.addAction(action)
            self.chapters_menu.addAction(action)
            self._chapter_actions[chapter.id] = action

    def set_active_chapter(self, chapter_id: str):
        action = self._chapter_actions.get(chapter_id)
        if action is not None:
            action.setChecked(True)

    def set_controller(self, controller):
        """Inject the controller and wire UI signals to its slots.

        The controller is expected to expose methods:
        - handle_book_opened(Path)
        - open_chapter(str)
        - continue_reading()
        - handle_clear_progress()
        - handle_font_size_changed(int)
        - next_page() / previous_page()
        - shutdown()
        """
        self._controller = controller
        self.book_opened.connect(controller.handle_book_opened)
        self.chapter_selected.connect(controller.open_chapter)
        self.continue_requested.connect(controller.continue_reading)
        self.clear_progress_requested.connect(controller.handle_clear_progress)
        self.font_size_changed.connect(controller.handle_font_size_changed)
        self.next_page.connect(controller.next_page)
        self.previous_page.connect(controller.previous_page)
        self.closing.connect(controller.shutdown)

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)

    @override
    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard events for navigation (left-to-right reading order)."""
        if event.key() == Qt.Key.Key_Right:
            self.next_page.emit()
        elif event.key() == Qt.Key.Key_Left:
            self.previous_page.emit()
        else:
            super().keyPressEvent(event)

    @override
    def closeEvent(self, event: QCloseEvent):
        self.closing.emit()
        super().closeEvent(event)
