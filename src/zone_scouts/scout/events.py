"""Bounded log of player-facing scout messages."""

from __future__ import annotations

from .types import EVENT_LOG_SIZE


class EventLog:
    """Keeps the most recent ``max_entries`` messages, oldest first."""

    def __init__(self, max_entries: int = EVENT_LOG_SIZE) -> None:
        self.max_entries = max(1, max_entries)
        self._entries: list[str] = []

    def push(self, entry: str) -> None:
        self._entries.append(entry)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]

    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
