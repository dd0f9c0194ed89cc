"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from effect_zones.models import (
    Color,
    DrawInstruction,
    DrawKind,
    EntityGroup,
    EntitySnapshot,
    Frame,
    FrameOutput,
    GridPosition,
    PlayerState,
    WorldPosition,
    ZoneSettings,
)


class TestEntitySnapshot:
    def test_create_minimal(self):
        entity = EntitySnapshot(id=7, distance_to_player=12.5)
        assert entity.path is None
        assert entity.scale is None
        assert entity.world_position == WorldPosition(x=0, y=0)

    def test_snapshot_is_read_only(self):
        entity = EntitySnapshot(id=1, distance_to_player=0)
        with pytest.raises(ValidationError):
            entity.path = "Metadata/Effects/x"

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            EntitySnapshot(id=-1, distance_to_player=0)

    def test_grid_distance(self):
        a = GridPosition(x=0, y=0)
        b = GridPosition(x=3, y=4)
        assert a.distance_to(b) == pytest.approx(5.0)


class TestSettings:
    def test_defaults(self):
        settings = ZoneSettings()
        assert settings.collect_unknown_effects is True
        assert settings.enable_debugging is False
        assert settings.alert_cooldown_seconds == 5.0
        assert settings.lethal_window_seconds == 2.0
        assert settings.entity_groups == []

    def test_lookup_range_must_be_positive(self):
        with pytest.raises(ValidationError):
            ZoneSettings(entity_lookup_range=0)

    def test_color_bounds(self):
        with pytest.raises(ValidationError):
            Color(r=256)
        assert Color(a=0).visible is False
        assert Color(a=1).visible is True

    def test_group_from_dict(self):
        settings = ZoneSettings.model_validate({
            "entity_groups": [
                {
                    "name": "Ground fire",
                    "path_templates": ["ground_fire", "burning&!cold"],
                    "custom_scale": 1.5,
                    "play_alert": True,
                }
            ],
        })
        group = settings.entity_groups[0]
        assert isinstance(group, EntityGroup)
        assert group.path_templates == ["ground_fire", "burning&!cold"]
        assert group.base_size_override == 0.0
        assert group.play_alert is True


class TestFrame:
    def test_frame_accepts_missing_entities(self):
        frame = Frame(entities=[None, EntitySnapshot(id=1, distance_to_player=3)])
        assert frame.entities[0] is None
        assert frame.player == PlayerState()

    def test_output_defaults_are_independent(self):
        a = FrameOutput()
        b = FrameOutput()
        a.draws.append(DrawInstruction(kind=DrawKind.TEXT, position=WorldPosition(x=1, y=2), text="x"))
        assert b.draws == []
