"""Persistence for the response history."""

import json
from pathlib import Path
from typing import Optional

from ..core.errors import PersistenceFailure
from ..models import DEFAULT_MAX_ENTRIES, ExecutionResult, HistoryLog
from ..utils.logger import get_logger

logger = get_logger(__name__)


class HistoryStore:
    """Read and write the history log as a JSON document.

    Writes are plain read-modify-write; concurrent processes sharing the
    file get last-write-wins.
    """

    def __init__(self, path: Path, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.path = Path(path)
        self.max_entries = max_entries

    def load(self) -> HistoryLog:
        """Load history; a missing file is an empty log.

        Raises:
            PersistenceFailure: the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            return HistoryLog(max_entries=self.max_entries)
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                history = HistoryLog.from_dict(json.load(f))
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise PersistenceFailure(
                f"Failed to load history from {self.path}: {e}"
            ) from e
        # The configured capacity wins over the one stored in the file
        history.resize(self.max_entries)
        logger.debug(f"Loaded {len(history)} history entries")
        return history

    def save(self, history: HistoryLog) -> None:
        """Write history to disk.

        Raises:
            PersistenceFailure: the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(history.to_dict(), f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceFailure(
                f"Failed to save history to {self.path}: {e}"
            ) from e


def add_to_history(
    store: HistoryStore, request_name: str, response: ExecutionResult
) -> HistoryLog:
    """Append one result to the stored history."""
    history = store.load()
    history.add_entry(request_name, response)
    store.save(history)
    return history


def clear_history(store: HistoryStore) -> None:
    store.save(HistoryLog(max_entries=store.max_entries))


def export_history_entry(store: HistoryStore, entry_id: str, path: Path) -> None:
    """Write one history entry to a standalone JSON file.

    Raises:
        PersistenceFailure: the entry does not exist or cannot be written
    """
    entry = store.load().find(entry_id)
    if entry is None:
        raise PersistenceFailure(f"History entry not found: {entry_id}")
    data = {
        'request_name': entry.request_name,
        'response': entry.response.to_dict(),
        'created_at': entry.created_at.isoformat(),
    }
    _write_json(Path(path), data)


def export_last_response(store: HistoryStore, path: Path) -> Optional[Path]:
    """Write the most recent response to ``path``.

    Returns:
        The written path, or None when history is empty
    """
    latest = store.load().get_latest()
    if latest is None:
        return None
    _write_json(Path(path), latest.response.to_dict())
    return Path(path)


def _write_json(path: Path, data) -> None:
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise PersistenceFailure(f"Failed to write {path}: {e}") from e
