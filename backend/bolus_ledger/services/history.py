from __future__ import annotations

import threading
from collections import deque

from bolus_ledger.core.constants import HISTORY_CAPACITY
from bolus_ledger.models.bolus import BolusCalculationResult


class DoseHistoryLedger:
    """Most-recent-first log of past calculations; the oldest is evicted at capacity."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        self._entries: deque[BolusCalculationResult] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, result: BolusCalculationResult) -> None:
        with self._lock:
            self._entries.appendleft(result)

    def list(self) -> list[BolusCalculationResult]:
        with self._lock:
            return list(self._entries)


__all__ = ["DoseHistoryLedger"]
