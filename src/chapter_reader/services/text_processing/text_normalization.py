"""Text normalization utilities applied to chapter content before pagination."""

import re
from typing import Iterable, List

from chapter_reader.core import normalize_line_endings

_BLANK_LINE_RUN = re.compile(r"\n{2,}")

_KHMER_DIGITS = str.maketrans("0123456789", "០១២៣៤៥៦៧៨៩")


def split_paragraphs(content: Iterable[str]) -> List[str]:
    """
    Split content strings into paragraphs on blank-line boundaries.

    Rules:
    - A string containing a blank line is split on runs of two or more
      newlines; pieces are stripped and empty pieces dropped
    - Any other string passes through untouched, indentation included

    Args:
        content: Raw content strings from the content provider.

    Returns:
        Paragraph strings in reading order.
    """
    paragraphs: List[str] = []
    for raw in content:
        text = normalize_line_endings(raw)
        if "\n\n" in text:
            paragraphs.extend(
                piece.strip() for piece in _BLANK_LINE_RUN.split(text) if piece.strip()
            )
        else:
            paragraphs.append(text)
    return paragraphs


def to_khmer_number(value: int) -> str:
    """Render an integer with Khmer digits."""
    return str(value).translate(_KHMER_DIGITS)
