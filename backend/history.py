import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

from backend.config import DEFAULT_HISTORY_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str

    @property
    def text(self) -> str:
        return f"{self.expression} = {self.result}"


class HistoryLog:
    """Bounded log of completed calculations, oldest first. Full logs drop their oldest entry."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._entries = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def append(self, entry: HistoryEntry):
        if len(self._entries) == self.capacity:
            logger.debug(f"History full, dropping '{self._entries[0].text}'")
        self._entries.append(entry)

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]
