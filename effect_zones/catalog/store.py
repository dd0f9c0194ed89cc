"""
Effect Catalog — the unknown and lethal effect path collections.

Updated by: Classification Pipeline (unknown paths) + Lethal-Zone Tracker
Mutated by: the two user commands (remove matched, clear all)
"""

import threading
from typing import Callable, Iterable, List, Optional


class EffectCatalog:
    """
    Two ordered, de-duplicated path lists. The pipeline only ever appends;
    removal happens through explicit commands.
    """

    def __init__(
        self,
        unknown_effects: Optional[Iterable[str]] = None,
        lethal_effects: Optional[Iterable[str]] = None,
    ):
        self._lock = threading.Lock()
        self._unknown: List[str] = []
        self._lethal: List[str] = []
        for path in unknown_effects or []:
            self.add_unknown(path)
        for path in lethal_effects or []:
            self.add_lethal(path)

    @property
    def unknown_effects(self) -> List[str]:
        """Snapshot of unknown effect paths, in discovery order."""
        with self._lock:
            return list(self._unknown)

    @property
    def lethal_effects(self) -> List[str]:
        """Snapshot of lethal effect paths, in discovery order."""
        with self._lock:
            return list(self._lethal)

    def _append_unique(self, name: str, path: str) -> bool:
        with self._lock:
            target = getattr(self, name)
            if path in target:
                return False
            target.append(path)
            return True

    def add_unknown(self, path: str) -> bool:
        """Record an unmatched path. Returns False if already known."""
        return self._append_unique("_unknown", path)

    def add_lethal(self, path: str) -> bool:
        """Record a path present at the player's death. Returns False if already known."""
        return self._append_unique("_lethal", path)

    def remove_unknown_matching(self, is_matched: Callable[[str], bool]) -> List[str]:
        """Drop every unknown path the predicate accepts. Returns the removed paths."""
        with self._lock:
            removed = [p for p in self._unknown if is_matched(p)]
            if removed:
                self._unknown[:] = [p for p in self._unknown if p not in removed]
        return removed

    def clear(self) -> None:
        """Empty both the unknown and lethal collections."""
        with self._lock:
            self._unknown.clear()
            self._lethal.clear()
