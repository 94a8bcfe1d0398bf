"""Coordinators - Orchestration layer connecting UI with business logic."""

from .reader_controller import ReaderController
from .scroll_throttle import FRAME_INTERVAL_MS, ScrollSaveThrottle

__all__ = [
    "ReaderController",
    "ScrollSaveThrottle",
    "FRAME_INTERVAL_MS",
]
