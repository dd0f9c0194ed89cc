"""Alert cooldown — at most one sound per window, at most once per entity."""

import threading
import time
from typing import Callable, Optional, Set


class AlertCooldown:
    """
    Shared cooldown for alert sounds.

    The alerted-id set is scoped to the current cooldown window: each time an
    alert fires the set restarts with just that entity, so it never grows
    beyond the entities alerted since the last reset.
    """

    def __init__(
        self,
        cooldown_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._last_fired_at: Optional[float] = None
        self._alerted: Set[int] = set()
        self._lock = threading.Lock()

    @property
    def alerted_ids(self) -> Set[int]:
        with self._lock:
            return set(self._alerted)

    def ready(self) -> bool:
        """Whether the shared cooldown has elapsed."""
        now = self._clock()
        with self._lock:
            return self._ready(now)

    def _ready(self, now: float) -> bool:
        if self._last_fired_at is None:
            return True
        return now - self._last_fired_at > self.cooldown_seconds

    def try_fire(self, entity_id: int) -> bool:
        """Claim the alert for an entity. Returns False while cooling down."""
        now = self._clock()
        with self._lock:
            if not self._ready(now) or entity_id in self._alerted:
                return False
            self._last_fired_at = now
            self._alerted = {entity_id}
            return True
