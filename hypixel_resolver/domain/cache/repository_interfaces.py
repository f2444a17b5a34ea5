"""
Cache Repository Interfaces

Abstract repository interface following the DDD Repository pattern.
Defines the contract for Cache Entry and Identifier Mapping persistence,
and owns the per-type cache policy.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from .entities import CachePolicy, IdentifierMapping
from .value_objects import CacheType, MappingKind, TTL
from ..resources.entities import HypixelObject


class CacheRepository(ABC):
    """
    Abstract repository for cached records and identifier mappings.

    Staleness is never evaluated here; stores return whatever they hold
    and callers judge freshness against ``policy``.
    """

    def __init__(self, policy: Optional[CachePolicy] = None):
        self.policy = policy or CachePolicy()

    @abstractmethod
    async def get_record(
        self, cache_type: CacheType, identifier: str
    ) -> Optional[HypixelObject]:
        """Find the cached record for (cache type, identifier)."""
        pass

    @abstractmethod
    async def save_record(self, record: HypixelObject) -> HypixelObject:
        """Persist a record under its own key. May enrich it; returns the stored record."""
        pass

    @abstractmethod
    async def get_mapping(
        self, kind: MappingKind, alias: str
    ) -> Optional[IdentifierMapping]:
        """Find the mapping entry for (kind, alias)."""
        pass

    @abstractmethod
    async def save_mapping(self, mapping: IdentifierMapping) -> None:
        """Persist a mapping entry, replacing any previous one."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize underlying connections or directories."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release underlying connections."""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Report store availability."""
        pass

    def get_cache_time(self, cache_type: CacheType) -> TTL:
        return self.policy.get(cache_type)

    def set_cache_time(self, cache_type: CacheType, ttl: TTL) -> None:
        self.policy.set(cache_type, ttl)

    def reset_cache_time(self, cache_type: CacheType) -> None:
        self.policy.reset(cache_type)
