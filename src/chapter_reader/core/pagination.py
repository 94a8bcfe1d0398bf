"""Pagination engine - splits chapter paragraphs into character-budgeted pages."""

from typing import Iterable, List

DEFAULT_CHARS_PER_PAGE = 3500

# Minimum distance (in characters) between a chunk start and a soft break.
MIN_BREAK_OFFSET = 20

# Whitespace plus Latin, Khmer and full-width clause/sentence terminators.
# Scripts without inter-clause spacing (Thai, Arabic) are not covered.
SOFT_BREAK_CHARACTERS = frozenset(" \t\n.!?,;:។៕、，")

Page = List[str]


def normalize_line_endings(text: str) -> str:
    """Convert Windows and old Mac line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def is_soft_break(char: str) -> bool:
    """Return True if the character is a preferred cut point."""
    return char in SOFT_BREAK_CHARACTERS


def split_paragraph_into_chunks(text: str, budget: int) -> List[str]:
    """
    Cut a paragraph into chunks of at most ``budget`` characters.

    Each cut lands right after the nearest soft break found between the
    naive cut point and the back half of the window. When the window holds
    no soft break the text is hard-cut at the budget.

    Chunks are plain slices, so joining them yields the input unchanged.

    Args:
        text: Paragraph text, whitespace and indentation preserved.
        budget: Maximum chunk length; non-positive values are treated as 1.

    Returns:
        List of chunks in reading order.
    """
    budget = max(1, budget)
    length = len(text)
    if length <= budget:
        return [text]

    chunks: List[str] = []
    i = 0
    while i < length:
        end = min(i + budget, length)
        # A break at text[end] would make the chunk one character too long.
        search_from = end - 1
        window_start = min(i + max(budget // 2, MIN_BREAK_OFFSET), search_from)

        cut = end
        for j in range(search_from, window_start - 1, -1):
            if is_soft_break(text[j]):
                cut = j + 1
                break

        chunks.append(text[i:cut])
        i = cut

    return chunks


def paginate(paragraphs: Iterable[str], budget: int = DEFAULT_CHARS_PER_PAGE) -> List[Page]:
    """
    Accumulate paragraphs into pages under a character budget.

    Blank paragraphs are skipped. A chunk that would overflow a non-empty page
    starts a new page. The result always holds at least one page, which is
    empty when no paragraph carried any text.

    Args:
        paragraphs: Paragraph strings in reading order.
        budget: Maximum number of characters per page.

    Returns:
        List of pages, each a list of text segments.
    """
    budget = max(1, budget)
    pages: List[Page] = []
    current: Page = []
    used = 0

    for raw in paragraphs:
        if not raw or not raw.strip():
            continue
        paragraph = normalize_line_endings(raw)

        for chunk in split_paragraph_into_chunks(paragraph, budget):
            if used + len(chunk) > budget and current:
                pages.append(current)
                current = []
                used = 0
            current.append(chunk)
            used += len(chunk)

    if current:
        pages.append(current)

    return pages if pages else [[]]


def clamp_page_index(index: int, total_pages: int) -> int:
    """Clamp a stored page index into the range of the current pagination."""
    last = max(total_pages, 1) - 1
    return max(0, min(index, last))
