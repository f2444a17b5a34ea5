"""Unit tests for resolution metrics."""

from hypixel_resolver.monitoring.metrics import (
    ResolutionMetrics,
    ResolutionOutcome,
    UUIDLookupSource,
)


class TestResolutionMetrics:
    """Test counters and export."""

    def test_counters_are_isolated_per_instance(self):
        """Test each collector owns its registry."""
        first, second = ResolutionMetrics(), ResolutionMetrics()

        first.record_resolution("player", ResolutionOutcome.HIT)
        first.record_resolution("player", ResolutionOutcome.HIT)

        assert first.sample("hypixel_resolutions_total", cache_type="player", outcome="hit") == 2.0
        assert second.sample("hypixel_resolutions_total", cache_type="player", outcome="hit") == 0.0

    def test_export(self):
        """Test Prometheus text output names the counters."""
        metrics = ResolutionMetrics()
        metrics.record_uuid_lookup(UUIDLookupSource.MOJANG)

        output = metrics.export().decode()

        assert 'hypixel_uuid_lookups_total{source="mojang"} 1.0' in output
