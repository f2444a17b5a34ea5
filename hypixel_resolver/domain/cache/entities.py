"""
Cache Domain Entities

Identifier mappings and the per-type cache policy.
Encapsulates the freshness rules shared by every cache store.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .value_objects import CacheType, MappingKind, MappingKey, TTL


@dataclass
class IdentifierMapping:
    """
    Identifier mapping entity.

    Translates a human-facing alias (username, guild name, player uuid)
    to a canonical identifier. A null identifier is a cached negative result.
    """

    kind: MappingKind
    alias: str
    identifier: Optional[str]
    timestamp: float

    @classmethod
    def create(
        cls, kind: MappingKind, alias: str, identifier: Optional[str], now: float
    ) -> "IdentifierMapping":
        """Create new mapping entry stamped at ``now``."""
        return cls(kind=kind, alias=alias, identifier=identifier, timestamp=now)

    @property
    def is_negative(self) -> bool:
        return self.identifier is None

    def get_key(self) -> MappingKey:
        """Get mapping key for this entry."""
        return MappingKey(self.kind, self.alias)

    def governing_cache_type(self) -> CacheType:
        """Cache type whose TTL decides this entry's freshness."""
        if self.is_negative:
            return self.kind.negative_cache_type
        return self.kind.cache_type

    def is_expired(self, policy: "CachePolicy", now: float) -> bool:
        """Check if mapping entry is stale under ``policy``."""
        return policy.get(self.governing_cache_type()).is_expired(self.timestamp, now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "alias": self.alias,
            "identifier": self.identifier,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IdentifierMapping":
        return cls(
            kind=MappingKind(data["kind"]),
            alias=data["alias"],
            identifier=data.get("identifier"),
            timestamp=float(data["timestamp"]),
        )


@dataclass
class CachePolicy:
    """
    Cache policy entity.

    Maps every cache type to a TTL. Setting a type to TTL.max() disables
    refreshing for it; the UUID type doubles as the lookup circuit breaker.
    """

    times: Dict[CacheType, TTL] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for cache_type in CacheType:
            self.times.setdefault(cache_type, cache_type.default_ttl)
        self._baseline = dict(self.times)

    @classmethod
    def from_seconds(cls, seconds_by_name: Dict[str, int]) -> "CachePolicy":
        """Build a policy from a ``cache type name -> seconds`` map."""
        return cls(
            times={CacheType(name): TTL(seconds) for name, seconds in seconds_by_name.items()}
        )

    def get(self, cache_type: CacheType) -> TTL:
        return self.times[cache_type]

    def set(self, cache_type: CacheType, ttl: TTL) -> None:
        self.times[cache_type] = ttl

    def reset(self, cache_type: CacheType) -> None:
        """Restore the TTL ``cache_type`` had when the policy was built."""
        self.times[cache_type] = self._baseline[cache_type]

    def is_max(self, cache_type: CacheType) -> bool:
        return self.times[cache_type].is_max
