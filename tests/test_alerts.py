"""Tests for the alert cooldown."""

from effect_zones.pipeline.alerts import AlertCooldown


class TestAlertCooldown:
    def test_first_alert_fires(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        assert cooldown.try_fire(1) is True
        assert cooldown.alerted_ids == {1}

    def test_cooldown_blocks_other_entities(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        cooldown.try_fire(1)
        clock.advance(4.9)
        assert cooldown.try_fire(2) is False

    def test_fires_again_after_cooldown(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        cooldown.try_fire(1)
        clock.advance(5.1)
        assert cooldown.try_fire(2) is True

    def test_same_entity_not_alerted_twice(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        cooldown.try_fire(1)
        clock.advance(10)
        assert cooldown.try_fire(1) is False

    def test_alerted_set_resets_with_cooldown(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        cooldown.try_fire(1)
        clock.advance(6)
        cooldown.try_fire(2)
        assert cooldown.alerted_ids == {2}
        clock.advance(6)
        assert cooldown.try_fire(1) is True

    def test_ready_tracks_cooldown(self, clock):
        cooldown = AlertCooldown(cooldown_seconds=5.0, clock=clock)
        assert cooldown.ready() is True
        cooldown.try_fire(1)
        assert cooldown.ready() is False
        clock.advance(5.1)
        assert cooldown.ready() is True
