"""
Lethal-Zone Tracker — remembers what was around the player when they died.

States (keyed off the player's liveness):
  ALIVE → every observed entity is added/refreshed in the entity cache
  DEAD  → cached entities whose zone covers the death position are
          recorded as lethal in the catalog
"""

import logging
from typing import List, Optional

from effect_zones.cache.entity_cache import TimeBasedEntityCache
from effect_zones.catalog.store import EffectCatalog
from effect_zones.models.entity import EntitySnapshot, GridPosition, PlayerState

logger = logging.getLogger(__name__)

TILE_TO_GRID = 23
TILE_TO_WORLD = 250
WORLD_TO_GRID = TILE_TO_GRID / TILE_TO_WORLD


def zone_radius(entity: EntitySnapshot) -> Optional[float]:
    """Raw zone size in world units. Group overrides do not apply here."""
    if entity.ground_effect_size is not None:
        return entity.ground_effect_size
    return entity.animation_size


def covers(entity: EntitySnapshot, position: Optional[GridPosition]) -> bool:
    """Whether the entity's zone contains a grid position."""
    radius = zone_radius(entity)
    if radius is None:
        return False
    if position is not None and entity.grid_position is not None:
        distance = entity.grid_position.distance_to(position)
    else:
        distance = entity.distance_to_player
    return distance <= radius * WORLD_TO_GRID


class LethalZoneTracker:
    """Feeds the entity cache while the player lives, scans it when they die."""

    def __init__(self, entity_cache: TimeBasedEntityCache, catalog: EffectCatalog):
        self.entity_cache = entity_cache
        self.catalog = catalog
        self._last_position: Optional[GridPosition] = None
        self._death_scanned = False

    @property
    def last_position(self) -> Optional[GridPosition]:
        return self._last_position

    def observe(self, entity: EntitySnapshot, player: PlayerState) -> List[str]:
        """
        Run the tracker step for one entity. The first observation after the
        player dies triggers the scan; later ones wait for the next life.
        Returns newly recorded lethal paths.
        """
        if player.is_alive:
            if player.grid_position is not None:
                self._last_position = player.grid_position
            self._death_scanned = False
            self.entity_cache.add(entity)
            return []

        if self._death_scanned:
            return []
        self._death_scanned = True
        return self.scan(player.grid_position or self._last_position)

    def scan(self, death_position: Optional[GridPosition]) -> List[str]:
        """
        Record the path of every recent entity covering the death position.
        Safe to repeat: the catalog drops duplicates.
        """
        added = []
        for recent in self.entity_cache.get_all():
            if not recent.path or not covers(recent, death_position):
                continue
            if self.catalog.add_lethal(recent.path):
                logger.debug("Lethal effect recorded: %s", recent.path)
                added.append(recent.path)
        return added
