"""Rejection Cache — short-circuits entities that failed classification recently."""

import threading
import time
from typing import Callable, Dict

REJECTION_WINDOW_SECONDS = 1.0


class RejectionCache:
    """
    Entity id -> time of last rejection. Keyed by id, not path: two entities
    sharing a path are rejected independently.

    Stale records are dropped by the reader; no sweeper is needed since reads
    happen every tick for every visible entity.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._rejected_at: Dict[int, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rejected_at)

    def mark_rejected(self, entity_id: int) -> None:
        now = self._clock()
        with self._lock:
            self._rejected_at[entity_id] = now

    def is_rejected_recently(self, entity_id: int) -> bool:
        now = self._clock()
        with self._lock:
            rejected_at = self._rejected_at.get(entity_id)
            if rejected_at is None:
                return False
            if now - rejected_at > REJECTION_WINDOW_SECONDS:
                del self._rejected_at[entity_id]
                return False
            return True
