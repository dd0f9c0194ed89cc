"""Zone settings — user-authored rules and toggles."""

from typing import List

from pydantic import BaseModel, Field


class Color(BaseModel):
    """RGBA color, 0-255 per channel."""

    r: int = Field(ge=0, le=255, default=255)
    g: int = Field(ge=0, le=255, default=255)
    b: int = Field(ge=0, le=255, default=255)
    a: int = Field(ge=0, le=255, default=255)

    @property
    def visible(self) -> bool:
        return self.a > 0


class EntityGroup(BaseModel):
    """
    A named rule group. The first group with a template matching an entity's
    path decides how that entity is drawn.
    """

    name: str
    path_templates: List[str] = []
    base_size_override: float = 0.0         # <= 0 means "use the entity's own size"
    ignore_scale: bool = False
    custom_scale: float = 1.0
    circle_color: Color = Color(r=255, g=0, b=0, a=60)
    border_color: Color = Color(r=255, g=0, b=0, a=255)
    border_thickness: int = Field(ge=0, default=1)
    play_alert: bool = False


class ZoneSettings(BaseModel):
    """Configuration for the classification pipeline."""

    entity_lookup_range: float = Field(gt=0, default=100.0)
    blacklist_templates: List[str] = []
    entity_groups: List[EntityGroup] = []
    collect_unknown_effects: bool = True
    enable_debugging: bool = False
    ignore_fullscreen_panels: bool = False
    ignore_large_panels: bool = False
    alert_cooldown_seconds: float = Field(ge=0, default=5.0)
    alert_sound: str = "alert.wav"
    lethal_window_seconds: float = Field(gt=0, default=2.0)
