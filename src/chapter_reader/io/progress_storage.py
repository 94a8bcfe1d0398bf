"""Progress storage - plugin interface and backends for reading-progress snapshots."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


class ProgressStorage(ABC):
    """
    Abstract interface for durable reading-progress storage.

    Backends store a single versioned snapshot. A snapshot written under a
    different schema version is never handed back to the caller.
    """

    def __init__(self, version: int):
        self.version = version

    @abstractmethod
    def load(self) -> Optional[Snapshot]:
        """
        Return the stored state for the current schema version.

        Returns:
            The state dict, or None when nothing usable is stored.
        """
        pass

    @abstractmethod
    def save(self, state: Snapshot) -> None:
        """
        Replace the stored state.

        Raises:
            OSError: if the backend cannot write.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored state."""
        pass


class InMemoryProgressStorage(ProgressStorage):
    """
    Simple in-memory storage.

    Used for testing and for sessions that should not touch the disk.
    """

    def __init__(self, version: int, initial: Optional[Snapshot] = None):
        super().__init__(version)
        self._record: Optional[Snapshot] = initial

    def load(self) -> Optional[Snapshot]:
        if self._record is None:
            return None
        if self._record.get("version") != self.version:
            return None
        return json.loads(json.dumps(self._record.get("state")))

    def save(self, state: Snapshot) -> None:
        self._record = {"version": self.version, "state": json.loads(json.dumps(state))}

    def clear(self) -> None:
        self._record = None

    @property
    def record(self) -> Optional[Snapshot]:
        """The raw versioned record, for diagnostics and testing."""
        return self._record


class JsonFileProgressStorage(ProgressStorage):
    """
    File-based storage keeping the whole snapshot in one JSON document.

    Format:
    {
        "version": 3,
        "state": {
            "current_book_id": "...",
            "current_chapter_id": "...",
            "current_position": {...},
            "locations": {"<book>:<chapter>": {...}},
            "font_size": 16
        }
    }
    """

    DEFAULT_FILENAME = "progress.json"

    def __init__(self, path: Path, version: int):
        super().__init__(version)
        self.path = Path(path)

    def load(self) -> Optional[Snapshot]:
        """Read the snapshot, discarding unreadable or foreign-version files."""
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Error reading progress file %s: %s", self.path, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Ignoring progress file %s: unexpected layout", self.path)
            return None

        stored_version = data.get("version")
        if stored_version != self.version:
            logger.info(
                "Discarding progress file %s: version %r, expected %r",
                self.path,
                stored_version,
                self.version,
            )
            return None

        state = data.get("state")
        if not isinstance(state, dict):
            logger.warning("Ignoring progress file %s: missing state", self.path)
            return None
        return state

    def save(self, state: Snapshot) -> None:
        """Write the snapshot through a temporary file so a crash never truncates it."""
        payload = {"version": self.version, "state": state}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def clear(self) -> None:
        if self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                logger.warning("Error deleting progress file %s: %s", self.path, e)
