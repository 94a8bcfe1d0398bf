"""Text processing services - content normalization and numeral formatting."""

from chapter_reader.services.text_processing.text_normalization import (
    normalize_line_endings,
    split_paragraphs,
    to_khmer_number,
)

__all__ = [
    "normalize_line_endings",
    "split_paragraphs",
    "to_khmer_number",
]
