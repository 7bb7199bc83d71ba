"""Response history models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from uuid import uuid4

from .http_models import ExecutionResult

DEFAULT_MAX_ENTRIES = 100


@dataclass
class HistoryEntry:
    """One recorded execution."""

    id: str
    request_name: str
    response: ExecutionResult
    created_at: datetime

    @classmethod
    def create(
        cls, request_name: str, response: ExecutionResult
    ) -> "HistoryEntry":
        """Create new entry with generated ID."""
        return cls(
            id=str(uuid4()),
            request_name=request_name,
            response=response,
            created_at=datetime.now(timezone.utc),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'request_name': self.request_name,
            'response': self.response.to_dict(),
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(data['id']),
            request_name=data['request_name'],
            response=ExecutionResult.from_dict(data['response']),
            created_at=datetime.fromisoformat(data['created_at']),
        )


@dataclass
class HistoryLog:
    """Bounded log of executions, oldest first.

    Adding past capacity evicts from the front (FIFO).
    """

    entries: List[HistoryEntry] = field(default_factory=list)
    max_entries: int = DEFAULT_MAX_ENTRIES

    def __len__(self) -> int:
        return len(self.entries)

    def add_entry(
        self, request_name: str, response: ExecutionResult
    ) -> HistoryEntry:
        entry = HistoryEntry.create(request_name, response)
        self.entries.append(entry)
        self._evict_overflow()
        return entry

    def resize(self, max_entries: int) -> None:
        """Change capacity, dropping the oldest entries that no longer fit."""
        self.max_entries = max_entries
        self._evict_overflow()

    def _evict_overflow(self) -> None:
        # Keep only the most recent entries
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            del self.entries[:overflow]

    def get_latest(self) -> Optional[HistoryEntry]:
        return self.entries[-1] if self.entries else None

    def get_by_request_name(self, name: str) -> List[HistoryEntry]:
        return [entry for entry in self.entries if entry.request_name == name]

    def get_recent(self, count: int) -> List[HistoryEntry]:
        """Return up to ``count`` entries, newest first."""
        return list(reversed(self.entries))[:count]

    def find(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self.entries.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entries': [entry.to_dict() for entry in self.entries],
            'max_entries': self.max_entries,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryLog":
        log = cls(entries=[HistoryEntry.from_dict(e) for e in data.get('entries', [])])
        log.resize(int(data.get('max_entries', DEFAULT_MAX_ENTRIES)))
        return log
