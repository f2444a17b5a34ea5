"""
Resolution Metrics

Prometheus counters for resolution outcomes and UUID lookup sources.
Each collector owns its registry so several clients can coexist.
"""

from prometheus_client import CollectorRegistry, Counter, generate_latest


class ResolutionOutcome:
    """Labels for ``hypixel_resolutions_total{outcome}``."""

    HIT = "hit"
    REFRESHED = "refreshed"
    STALE = "stale"
    ERROR = "error"
    EMPTY = "empty"


class UUIDLookupSource:
    """Labels for ``hypixel_uuid_lookups_total{source}``."""

    CACHE = "cache"
    MOJANG = "mojang"
    HYPIXEL = "hypixel"
    CIRCUIT_OPEN = "circuit_open"
    UNRESOLVED = "unresolved"


class ResolutionMetrics:
    """Prometheus-compatible counters for the resolution layer."""

    def __init__(self):
        self.registry = CollectorRegistry()

        self.prom_resolutions_total = Counter(
            "hypixel_resolutions_total",
            "Resolutions by cache type and outcome",
            ["cache_type", "outcome"],
            registry=self.registry,
        )
        self.prom_uuid_lookups_total = Counter(
            "hypixel_uuid_lookups_total",
            "UUID lookups by answering source",
            ["source"],
            registry=self.registry,
        )

    def record_resolution(self, cache_type: str, outcome: str) -> None:
        self.prom_resolutions_total.labels(cache_type=cache_type, outcome=outcome).inc()

    def record_uuid_lookup(self, source: str) -> None:
        self.prom_uuid_lookups_total.labels(source=source).inc()

    def sample(self, name: str, **labels: str) -> float:
        """Current value of a counter sample, 0.0 when never incremented."""
        value = self.registry.get_sample_value(name, labels)
        return value if value is not None else 0.0

    def export(self) -> bytes:
        """Render metrics in Prometheus text format."""
        return generate_latest(self.registry)
