"""Services layer - reading state and configuration."""

from chapter_reader.services.position_store import ReadingPositionStore
from chapter_reader.services.settings_manager import SettingsManager

# Text processing services
from chapter_reader.services.text_processing import normalize_line_endings, split_paragraphs, to_khmer_number

__all__ = [
    "ReadingPositionStore",
    "SettingsManager",
    "normalize_line_endings",
    "split_paragraphs",
    "to_khmer_number",
]
