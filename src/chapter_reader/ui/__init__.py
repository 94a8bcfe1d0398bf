"""UI layer - PySide6 presentation components."""

from .main_window import MainWindow
from .reader_view import ReaderView

__all__ = ["MainWindow", "ReaderView"]
