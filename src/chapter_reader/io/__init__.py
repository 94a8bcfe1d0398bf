"""I/O layer - Data access for persistence and file operations."""

from .book_ingestor import BookIngestor
from .progress_storage import InMemoryProgressStorage, JsonFileProgressStorage, ProgressStorage

__all__ = [
    "BookIngestor",
    "ProgressStorage",
    "InMemoryProgressStorage",
    "JsonFileProgressStorage",
]
