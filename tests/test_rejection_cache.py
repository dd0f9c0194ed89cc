"""Tests for the rejection cache."""

from effect_zones.cache.rejection import REJECTION_WINDOW_SECONDS, RejectionCache


class TestRejectionCache:
    def test_unknown_entity_not_rejected(self, clock):
        cache = RejectionCache(clock=clock)
        assert cache.is_rejected_recently(1) is False

    def test_recent_rejection(self, clock):
        cache = RejectionCache(clock=clock)
        cache.mark_rejected(1)
        assert cache.is_rejected_recently(1) is True
        clock.advance(REJECTION_WINDOW_SECONDS)
        assert cache.is_rejected_recently(1) is True

    def test_rejection_expires_and_is_removed(self, clock):
        cache = RejectionCache(clock=clock)
        cache.mark_rejected(1)
        clock.advance(REJECTION_WINDOW_SECONDS + 0.01)
        assert cache.is_rejected_recently(1) is False
        assert len(cache) == 0

    def test_keyed_by_entity(self, clock):
        cache = RejectionCache(clock=clock)
        cache.mark_rejected(1)
        clock.advance(0.6)
        cache.mark_rejected(2)
        clock.advance(0.6)
        assert cache.is_rejected_recently(1) is False
        assert cache.is_rejected_recently(2) is True

    def test_mark_again_refreshes(self, clock):
        cache = RejectionCache(clock=clock)
        cache.mark_rejected(1)
        clock.advance(0.8)
        cache.mark_rejected(1)
        clock.advance(0.8)
        assert cache.is_rejected_recently(1) is True
