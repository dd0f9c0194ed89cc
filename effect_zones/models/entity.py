"""Entity snapshots — read-only per-frame data handed over by the host."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorldPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0


class GridPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: "GridPosition") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


class EntitySnapshot(BaseModel):
    """A single observed entity. The core only reads and stores these."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)                    # Stable for the entity's lifetime
    path: Optional[str] = None              # Base animated object path
    distance_to_player: float = Field(ge=0)  # Grid units
    scale: Optional[float] = None           # None when the host has no positioned data
    ground_effect_size: Optional[float] = None
    animation_size: Optional[float] = None
    world_position: WorldPosition = WorldPosition(x=0, y=0)
    grid_position: Optional[GridPosition] = None


class PlayerState(BaseModel):
    """The tracked reference point."""

    model_config = ConfigDict(frozen=True)

    is_alive: bool = True
    grid_position: Optional[GridPosition] = None


class Frame(BaseModel):
    """Everything the pipeline consumes for one tick."""

    entities: List[Optional[EntitySnapshot]] = []
    player: PlayerState = PlayerState()
    fullscreen_panel_visible: bool = False
    large_panel_visible: bool = False
