"""Main entry point for the chapter reader application."""

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from chapter_reader.coordinators import ReaderController
from chapter_reader.io import BookIngestor, JsonFileProgressStorage
from chapter_reader.services import ReadingPositionStore, SettingsManager
from chapter_reader.ui import MainWindow, ReaderView


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    # 1. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Chapter Reader")
    app.setOrganizationName("ChapterReader")

    # 2. Initialize Infrastructure
    settings = SettingsManager()
    ingestor = BookIngestor()
    storage = JsonFileProgressStorage(
        settings.get_progress_path(),
        version=ReadingPositionStore.SCHEMA_VERSION,
    )
    position_store = ReadingPositionStore(storage)

    # 3. Construct UI
    reader_view = ReaderView()
    reader_view.set_font_size(position_store.font_size)
    main_window = MainWindow(books_dir=settings.get_books_dir())
    main_window.set_font_size(position_store.font_size)
    main_window.set_reader_view(reader_view)

    # 4. Instantiate Coordinator (Dependency Injection)
    controller = ReaderController(
        main_window=main_window,
        reader_view=reader_view,
        ingestor=ingestor,
        position_store=position_store,
        chars_per_page=settings.get_chars_per_page(),
    )

    # 5. Signal Wiring (Connect UI signals to Controller slots)
    main_window.set_controller(controller)
    reader_view.scrolled.connect(controller.handle_scroll)
    reader_view.next_requested.connect(controller.next_page)
    reader_view.previous_requested.connect(controller.previous_page)
    reader_view.page_jump_requested.connect(controller.jump_to_page)

    # Optional book path on the command line
    if len(sys.argv) > 1:
        controller.handle_book_opened(Path(sys.argv[1]))

    # 6. Show UI and start event loop
    main_window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
