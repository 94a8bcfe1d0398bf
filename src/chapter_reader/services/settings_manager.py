"""Settings Manager - Handles pagination and storage configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from chapter_reader.core import DEFAULT_CHARS_PER_PAGE


class SettingsManager:
    """
    Manages reader configuration.

    Reads values from a .env file in the project root, falling back to
    defaults when a value is missing or invalid.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_chars_per_page(self) -> int:
        """Get the page character budget, defaulting for missing or non-positive values."""
        raw = os.getenv("READER_CHARS_PER_PAGE")
        if not raw or not raw.strip():
            return DEFAULT_CHARS_PER_PAGE
        try:
            value = int(raw.strip())
        except ValueError:
            return DEFAULT_CHARS_PER_PAGE
        return value if value > 0 else DEFAULT_CHARS_PER_PAGE

    def get_progress_path(self) -> Path:
        """Get the path of the reading-progress JSON file."""
        raw = os.getenv("READER_PROGRESS_PATH")
        if raw and raw.strip():
            return Path(raw.strip()).expanduser()
        return Path.home() / ".chapter_reader" / "progress.json"

    def get_books_dir(self) -> Optional[Path]:
        """Get the default directory offered when opening a book."""
        raw = os.getenv("READER_BOOKS_DIR")
        return Path(raw.strip()).expanduser() if raw and raw.strip() else None

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
