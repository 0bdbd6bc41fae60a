"""Tests for the rate limit registry."""

from datetime import timedelta

import pytest

from envelope_transport.governance.rate_limits import UNIVERSAL, RateLimitRegistry


@pytest.fixture
def registry(clock) -> RateLimitRegistry:
    return RateLimitRegistry(clock=clock)


def _in(clock, seconds):
    return clock.now + timedelta(seconds=seconds)


class TestRateLimitRegistry:
    def test_no_limits(self, registry):
        assert not registry.is_limited("error")
        assert not registry.is_limited("transaction")
        assert not registry.is_limited(None)

    def test_universal_limit_applies_to_every_category(self, registry, clock):
        registry.record_limit(UNIVERSAL, _in(clock, 10))

        assert registry.is_limited("transaction")
        assert registry.is_limited("error")

    def test_universal_limit_expires(self, registry, clock):
        registry.record_limit(UNIVERSAL, _in(clock, 10))

        clock.advance(10)
        # Expiry must be strictly in the future
        assert not registry.is_limited("error")

        clock.advance(1)
        assert not registry.is_limited("error")

    def test_category_limit_is_scoped(self, registry, clock):
        registry.record_limit("transaction", _in(clock, 10))

        assert registry.is_limited("transaction")
        assert not registry.is_limited("error")

    def test_unknown_category_uses_error_limit(self, registry, clock):
        registry.record_limit("error", _in(clock, 10))

        assert registry.is_limited("event")
        assert registry.is_limited(None)
        assert not registry.is_limited("transaction")

    def test_later_universal_wins_over_expired_category(self, registry, clock):
        registry.record_limit("error", _in(clock, -5))
        registry.record_limit(UNIVERSAL, _in(clock, 10))

        assert registry.expiry_for("error") == _in(clock, 10)
        assert registry.is_limited("error")

    def test_later_category_wins_over_expired_universal(self, registry, clock):
        registry.record_limit("transaction", _in(clock, 30))
        registry.record_limit(UNIVERSAL, _in(clock, 5))

        clock.advance(10)
        assert registry.is_limited("transaction")
        assert not registry.is_limited("error")

    def test_record_limit_overwrites(self, registry, clock):
        registry.record_limit("error", _in(clock, 60))
        registry.record_limit("error", _in(clock, 1))

        clock.advance(2)
        assert not registry.is_limited("error")

    def test_universal_is_not_a_category(self, registry, clock):
        registry.record_limit(UNIVERSAL, _in(clock, 10))

        assert UNIVERSAL != "error"
        assert registry.expiry_for("transaction") == _in(clock, 10)
        assert repr(UNIVERSAL) == "UNIVERSAL"

    def test_clear(self, registry, clock):
        registry.record_limit(UNIVERSAL, _in(clock, 10))
        registry.clear()

        assert not registry.is_limited("error")

    def test_stats(self, registry, clock):
        registry.record_limit(UNIVERSAL, _in(clock, 10))
        registry.record_limit("error", _in(clock, -10))

        stats = registry.stats
        assert stats["total_entries"] == 2
        assert stats["active_entries"] == 1
        assert stats["universal_active"] is True

    def test_naive_expiry_treated_as_utc(self, registry, clock):
        naive = clock.now.replace(tzinfo=None) + timedelta(seconds=10)
        registry.record_limit("error", naive)

        assert registry.is_limited("error")
        assert registry.expiry_for("error").tzinfo is not None

        clock.advance(11)
        assert not registry.is_limited("error")
