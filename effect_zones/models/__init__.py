"""Effect Zones data models."""

from effect_zones.models.entity import (
    EntitySnapshot,
    Frame,
    GridPosition,
    PlayerState,
    WorldPosition,
)
from effect_zones.models.render import (
    AlertRequest,
    DrawInstruction,
    DrawKind,
    FrameOutput,
)
from effect_zones.models.settings import Color, EntityGroup, ZoneSettings

__all__ = [
    "AlertRequest",
    "Color",
    "DrawInstruction",
    "DrawKind",
    "EntityGroup",
    "EntitySnapshot",
    "Frame",
    "FrameOutput",
    "GridPosition",
    "PlayerState",
    "WorldPosition",
    "ZoneSettings",
]
