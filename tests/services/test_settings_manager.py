"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from chapter_reader.core import DEFAULT_CHARS_PER_PAGE
from chapter_reader.services import SettingsManager

READER_VARIABLES = ("READER_CHARS_PER_PAGE", "READER_PROGRESS_PATH", "READER_BOOKS_DIR")


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Clean up reader variables from environment before and after test."""
    old_values = {name: os.environ.pop(name, None) for name in READER_VARIABLES}
    yield
    for name, value in old_values.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


def _settings_with(temp_env_dir, text):
    (temp_env_dir / ".env").write_text(text)
    return SettingsManager(project_root=temp_env_dir)


class TestSettingsManagerPagination:
    """Tests for the page character budget."""

    def test_default_when_unset(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, "")
        assert settings.get_chars_per_page() == DEFAULT_CHARS_PER_PAGE

    def test_reads_value_from_env_file(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, "READER_CHARS_PER_PAGE=1200\n")
        assert settings.get_chars_per_page() == 1200

    def test_strips_whitespace(self, temp_env_dir, clean_env):
        os.environ["READER_CHARS_PER_PAGE"] = "  900  "
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_chars_per_page() == 900

    @pytest.mark.parametrize("raw", ["abc", "0", "-50", "   "])
    def test_invalid_values_fall_back_to_default(self, temp_env_dir, clean_env, raw):
        os.environ["READER_CHARS_PER_PAGE"] = raw
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_chars_per_page() == DEFAULT_CHARS_PER_PAGE

    def test_reload_env_updates_budget(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, "READER_CHARS_PER_PAGE=1000\n")
        assert settings.get_chars_per_page() == 1000

        (temp_env_dir / ".env").write_text("READER_CHARS_PER_PAGE=2000\n")
        settings.reload_env()
        assert settings.get_chars_per_page() == 2000


class TestSettingsManagerPaths:
    """Tests for storage and library paths."""

    def test_default_progress_path_is_in_home(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, "")
        assert settings.get_progress_path() == Path.home() / ".chapter_reader" / "progress.json"

    def test_progress_path_from_env_file(self, temp_env_dir, clean_env):
        target = temp_env_dir / "state" / "progress.json"
        settings = _settings_with(temp_env_dir, f"READER_PROGRESS_PATH={target}\n")
        assert settings.get_progress_path() == target

    def test_books_dir_is_none_when_unset(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, "")
        assert settings.get_books_dir() is None

    def test_books_dir_from_env_file(self, temp_env_dir, clean_env):
        settings = _settings_with(temp_env_dir, f"READER_BOOKS_DIR={temp_env_dir}\n")
        assert settings.get_books_dir() == temp_env_dir

    def test_missing_env_file_uses_defaults(self, temp_env_dir, clean_env):
        """SettingsManager should handle missing .env file gracefully."""
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_chars_per_page() == DEFAULT_CHARS_PER_PAGE
        assert settings.get_books_dir() is None
