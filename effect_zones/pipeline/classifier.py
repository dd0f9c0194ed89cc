"""
Classification Pipeline — the per-tick heart of Effect Zones.

For every entity in a frame:
  REJECTED RECENTLY → skip
  NO PATH           → reject
  OUT OF RANGE      → skip (re-evaluated next tick)
  BLACKLISTED       → reject
  GROUP MATCH       → resolve radius + scale, alert, draw
  NO GROUP          → collect as unknown, reject
then hand the entity to the Lethal-Zone Tracker.

Every per-entity failure is contained to that entity; the rest of the tick
still runs.
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from effect_zones.cache.entity_cache import TimeBasedEntityCache
from effect_zones.cache.rejection import RejectionCache
from effect_zones.catalog.store import EffectCatalog
from effect_zones.lethal.tracker import LethalZoneTracker
from effect_zones.matching.matcher import PathMatcher
from effect_zones.models.entity import EntitySnapshot, Frame
from effect_zones.models.render import (
    AlertRequest,
    DrawInstruction,
    DrawKind,
    FrameOutput,
)
from effect_zones.models.settings import EntityGroup, ZoneSettings
from effect_zones.pipeline.alerts import AlertCooldown

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    SKIPPED = "skipped"         # Nothing decided, look again next tick
    FILTERED = "filtered"       # Rejected before group matching, not tracked
    REJECTED = "rejected"       # Not classified, backed off for a second
    DRAWN = "drawn"


def resolve_base_radius(group: EntityGroup, entity: EntitySnapshot) -> Optional[float]:
    """Group override, then ground effect size, then animation size."""
    if group.base_size_override > 0:
        return group.base_size_override
    if entity.ground_effect_size is not None:
        return entity.ground_effect_size
    return entity.animation_size


def resolve_scale(group: EntityGroup, entity: EntitySnapshot) -> Optional[float]:
    if group.ignore_scale:
        return 1.0
    return entity.scale


class ClassificationPipeline:
    """Classifies frame entities against the configured rule groups."""

    def __init__(
        self,
        settings: Optional[ZoneSettings] = None,
        catalog: Optional[EffectCatalog] = None,
        matcher: Optional[PathMatcher] = None,
        rejection_cache: Optional[RejectionCache] = None,
        entity_cache: Optional[TimeBasedEntityCache] = None,
        alert_cooldown: Optional[AlertCooldown] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or ZoneSettings()
        self.catalog = catalog or EffectCatalog()
        self.matcher = matcher or PathMatcher()
        self.rejection_cache = rejection_cache or RejectionCache(clock=clock)
        self.entity_cache = entity_cache or TimeBasedEntityCache(
            expiration_seconds=self.settings.lethal_window_seconds,
            clock=clock,
        )
        self.alert_cooldown = alert_cooldown or AlertCooldown(
            cooldown_seconds=self.settings.alert_cooldown_seconds,
            clock=clock,
        )
        self.lethal_tracker = LethalZoneTracker(self.entity_cache, self.catalog)

    def __enter__(self) -> "ClassificationPipeline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def shutdown(self) -> None:
        """Release the entity cache sweeper."""
        self.entity_cache.shutdown()

    def update_settings(self, settings: ZoneSettings) -> None:
        """
        Swap the rule set. Compiled templates of the old set are dropped and
        the new cooldown and lethal window apply from the next lookup.
        """
        self.settings = settings
        self.matcher.clear()
        self.alert_cooldown.cooldown_seconds = settings.alert_cooldown_seconds
        self.entity_cache.set_expiration(settings.lethal_window_seconds)

    # --- Per-tick evaluation ---

    def panels_block(self, frame: Frame) -> bool:
        """Whether an open UI panel suppresses the whole tick."""
        return (
            (frame.fullscreen_panel_visible and not self.settings.ignore_fullscreen_panels)
            or (frame.large_panel_visible and not self.settings.ignore_large_panels)
        )

    def render(self, frame: Frame) -> FrameOutput:
        """Run one tick."""
        output = FrameOutput()
        if self.panels_block(frame):
            output.skipped = True
            return output

        for entity in frame.entities:
            if entity is None:
                continue
            try:
                outcome = self.classify(entity, frame, output)
            except Exception:
                logger.exception("Failed to evaluate entity %s", entity.id)
                self.rejection_cache.mark_rejected(entity.id)
                continue

            if outcome in (Outcome.SKIPPED, Outcome.FILTERED):
                continue
            try:
                self.lethal_tracker.observe(entity, frame.player)
            except Exception:
                logger.exception("Lethal tracking failed for entity %s", entity.id)

        return output

    def classify(self, entity: EntitySnapshot, frame: Frame, output: FrameOutput) -> Outcome:
        """
        Decide what to do with one entity. Draws and alerts are appended to
        output. SKIPPED and FILTERED mean the lethal step must not run for
        this entity.
        """
        if self.rejection_cache.is_rejected_recently(entity.id):
            return Outcome.SKIPPED

        path = entity.path
        if not path:
            return self._reject(entity, Outcome.FILTERED)

        if entity.distance_to_player >= self.settings.entity_lookup_range:
            return Outcome.SKIPPED

        if self.matcher.matches_any(self.settings.blacklist_templates, path):
            return self._reject(entity, Outcome.FILTERED)

        group = self.find_group(path)
        if group is None:
            self._collect_unknown(path)
            return self._reject(entity)

        base_radius = resolve_base_radius(group, entity)
        if base_radius is None:
            return self._reject(entity)

        scale = resolve_scale(group, entity)
        if scale is None:
            logger.error("Unable to grab scale for entity %s (%s)", entity.id, path)
            return self._reject(entity)

        if group.play_alert and self.alert_cooldown.try_fire(entity.id):
            output.alerts.append(
                AlertRequest(entity_id=entity.id, sound=self.settings.alert_sound)
            )

        self._draw(entity, group, base_radius * scale * group.custom_scale, output)
        return Outcome.DRAWN

    def find_group(self, path: str) -> Optional[EntityGroup]:
        """First group, in configured order, with a template matching the path."""
        for group in self.settings.entity_groups:
            if self.matcher.matches_any(group.path_templates, path):
                return group
        return None

    def is_known_path(self, path: str) -> bool:
        """Whether any blacklist or group template now covers the path."""
        return self.matcher.matches_any(self.settings.blacklist_templates, path) or (
            self.find_group(path) is not None
        )

    def _reject(
        self, entity: EntitySnapshot, outcome: Outcome = Outcome.REJECTED
    ) -> Outcome:
        self.rejection_cache.mark_rejected(entity.id)
        return outcome

    def _collect_unknown(self, path: str) -> None:
        if self.settings.enable_debugging:
            logger.info("EffectZone for entity path: %s", path)
        if self.settings.collect_unknown_effects:
            self.catalog.add_unknown(path)

    def _draw(
        self,
        entity: EntitySnapshot,
        group: EntityGroup,
        radius: float,
        output: FrameOutput,
    ) -> None:
        position = entity.world_position
        if group.circle_color.visible:
            if self.settings.enable_debugging:
                output.draws.append(DrawInstruction(
                    kind=DrawKind.TEXT,
                    position=position,
                    text=entity.path.split("/")[-1],
                ))
            output.draws.append(DrawInstruction(
                kind=DrawKind.FILLED_CIRCLE,
                position=position,
                radius=radius,
                color=group.circle_color,
            ))

        if group.border_color.visible and group.border_thickness > 0:
            output.draws.append(DrawInstruction(
                kind=DrawKind.CIRCLE,
                position=position,
                radius=radius,
                color=group.border_color,
                thickness=group.border_thickness,
            ))

    # --- Commands ---

    def remove_matched_unknown_effects(self) -> List[str]:
        """Drop unknown paths that a blacklist or group template now matches."""
        return self.catalog.remove_unknown_matching(self.is_known_path)

    def clear_all_unknown_effects(self) -> None:
        """Empty both the unknown and the lethal collections."""
        self.catalog.clear()
