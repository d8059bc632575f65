"""Player-facing message log."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from idlelife.core.types import LogCategory, LogStyle

MAX_LOG_ENTRIES = 200


@dataclass(slots=True, frozen=True)
class LogEntry:
    message: str
    style: LogStyle = "STANDARD"
    category: LogCategory = "EVENT"


@dataclass(slots=True)
class GameLog:
    """Bounded in-game log; the oldest entries fall off first."""

    entries: Deque[LogEntry] = field(default_factory=lambda: deque(maxlen=MAX_LOG_ENTRIES))

    def add(self, message: str, style: LogStyle = "STANDARD", category: LogCategory = "EVENT") -> LogEntry:
        entry = LogEntry(message=message, style=style, category=category)
        self.entries.append(entry)
        return entry

    def recent(self, count: int = 10) -> List[LogEntry]:
        if count <= 0:
            return []
        return list(self.entries)[-count:]

    def __len__(self) -> int:
        return len(self.entries)
