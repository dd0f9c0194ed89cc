"""
Time-Based Entity Cache — recently seen entities, bounded by age.

Behavioral Contract:
- add() inserts or refreshes an entity; re-adding overwrites the snapshot
- get() and get_all() never return a record older than the expiration window
- get() removes a stale record it runs into (passive expiry)
- A background sweeper removes expired records even when nothing reads
- shutdown() must be called on teardown to stop the sweeper thread
"""

import logging
import threading
import time
from itertools import islice
from typing import Callable, Dict, List, Optional, Tuple

from effect_zones.models.entity import EntitySnapshot

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_SECONDS = 2.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 0.1
SWEEP_BATCH_SIZE = 256


class TimeBasedEntityCache:
    """Thread-safe entity id -> (snapshot, last seen) store."""

    def __init__(
        self,
        expiration_seconds: float = DEFAULT_EXPIRATION_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        start_sweeper: bool = True,
    ):
        if expiration_seconds <= 0:
            raise ValueError("expiration_seconds must be positive")
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        if sweep_interval_seconds >= expiration_seconds:
            raise ValueError("sweep_interval_seconds must be shorter than expiration_seconds")

        self.expiration_seconds = expiration_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: Dict[int, Tuple[EntitySnapshot, float]] = {}
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

        if start_sweeper:
            self._sweeper = threading.Thread(
                target=self._run_sweeper,
                name="entity-cache-sweeper",
                daemon=True,
            )
            self._sweeper.start()

    def __len__(self) -> int:
        """Stored records, including expired ones not yet swept."""
        with self._lock:
            return len(self._entries)

    def __enter__(self) -> "TimeBasedEntityCache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def set_expiration(self, expiration_seconds: float) -> None:
        """Change the window. Applies to stored records on the next read or sweep."""
        if expiration_seconds <= self.sweep_interval_seconds:
            raise ValueError("expiration_seconds must be longer than sweep_interval_seconds")
        with self._lock:
            self.expiration_seconds = expiration_seconds

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def _is_expired(self, timestamp: float, now: float) -> bool:
        return now - timestamp > self.expiration_seconds

    def add(self, entity: EntitySnapshot) -> None:
        """Insert or refresh an entity."""
        if entity is None:
            raise ValueError("entity must not be None")
        now = self._clock()
        with self._lock:
            self._entries[entity.id] = (entity, now)

    def get(self, entity_id: int) -> Optional[EntitySnapshot]:
        """Get an entity if it was seen within the expiration window."""
        now = self._clock()
        with self._lock:
            cached = self._entries.get(entity_id)
            if cached is None:
                return None
            entity, timestamp = cached
            if not self._is_expired(timestamp, now):
                return entity
            del self._entries[entity_id]
        return None

    def get_all(self) -> List[EntitySnapshot]:
        """All entities alive as of now. Does not remove anything."""
        now = self._clock()
        with self._lock:
            return [
                entity
                for entity, timestamp in self._entries.values()
                if not self._is_expired(timestamp, now)
            ]

    def sweep_expired(self) -> int:
        """
        Remove every expired record. The lock is released between batches so
        producers are never held up for more than one batch.
        """
        now = self._clock()
        with self._lock:
            expired = [
                entity_id
                for entity_id, (_, timestamp) in self._entries.items()
                if self._is_expired(timestamp, now)
            ]

        removed = 0
        keys = iter(expired)
        while True:
            batch = list(islice(keys, SWEEP_BATCH_SIZE))
            if not batch:
                break
            with self._lock:
                for entity_id in batch:
                    cached = self._entries.get(entity_id)
                    # Refreshed since the scan
                    if cached is None or not self._is_expired(cached[1], now):
                        continue
                    del self._entries[entity_id]
                    removed += 1

        if removed:
            logger.debug("Swept %d expired entities", removed)
        return removed

    def _run_sweeper(self) -> None:
        while not self._stop_event.wait(timeout=self.sweep_interval_seconds):
            self.sweep_expired()

    def shutdown(self) -> None:
        """Stop the background sweeper. Safe to call more than once."""
        self._stop_event.set()
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None and sweeper is not threading.current_thread():
            sweeper.join()
