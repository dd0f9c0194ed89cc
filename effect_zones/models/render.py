"""Frame output — draw instructions and alert requests for the host."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from effect_zones.models.entity import WorldPosition
from effect_zones.models.settings import Color


class DrawKind(str, Enum):
    FILLED_CIRCLE = "filled_circle"
    CIRCLE = "circle"
    TEXT = "text"


class DrawInstruction(BaseModel):
    kind: DrawKind
    position: WorldPosition
    radius: float = 0.0
    color: Optional[Color] = None
    thickness: Optional[int] = None         # Outlines only
    text: Optional[str] = None              # Debug text only


class AlertRequest(BaseModel):
    entity_id: int
    sound: str


class FrameOutput(BaseModel):
    """What a single tick produced."""

    draws: List[DrawInstruction] = []
    alerts: List[AlertRequest] = []
    skipped: bool = False                   # Whole tick suppressed by an open panel
