"""
Cache Value Objects

Immutable value objects for the cache domain.
Provides type safety for cache types, TTLs, and cache keys.
"""

from dataclasses import dataclass
from enum import Enum

from ...constants import DEFAULT_CACHE_TIMES, MAX_CACHE_TIME


class CacheType(str, Enum):
    """Entity types with their own freshness policy."""

    OVERALL = "overall"
    UUID = "uuid"
    UUID_NOT_FOUND = "uuid_not_found"
    PLAYER = "player"
    SESSION = "session"
    KEY_INFO = "key_info"
    GUILD = "guild"
    GUILD_NOT_FOUND = "guild_not_found"
    FRIENDS = "friends"
    BOOSTERS = "boosters"
    LEADERBOARDS = "leaderboards"
    WATCHDOG = "watchdog"

    @property
    def default_ttl(self) -> "TTL":
        """Default TTL for this cache type."""
        return TTL(DEFAULT_CACHE_TIMES[self.value])


class MappingKind(str, Enum):
    """Kinds of identifier mappings (alias -> canonical identifier)."""

    UUID = "uuid"
    GUILD_BY_PLAYER = "guild_by_player"
    GUILD_BY_NAME = "guild_by_name"

    @property
    def cache_type(self) -> CacheType:
        """Cache type governing positive entries of this mapping kind."""
        if self is MappingKind.UUID:
            return CacheType.UUID
        return CacheType.GUILD

    @property
    def negative_cache_type(self) -> CacheType:
        """Cache type governing negative (null identifier) entries."""
        if self is MappingKind.UUID:
            return CacheType.UUID_NOT_FOUND
        return CacheType.GUILD_NOT_FOUND


@dataclass(frozen=True)
class TTL:
    """
    Time To Live value object for cache freshness.

    A TTL equal to MAX_CACHE_TIME never expires.
    """

    seconds: int

    def __post_init__(self) -> None:
        """Validate TTL value."""
        if self.seconds < 0:
            raise ValueError("TTL cannot be negative")
        if self.seconds > MAX_CACHE_TIME:
            raise ValueError("TTL too large (max is the MAX_CACHE_TIME sentinel)")

    @classmethod
    def minutes(cls, minutes: int) -> "TTL":
        """Create TTL from minutes."""
        return cls(minutes * 60)

    @classmethod
    def hours(cls, hours: int) -> "TTL":
        """Create TTL from hours."""
        return cls(hours * 3600)

    @classmethod
    def days(cls, days: int) -> "TTL":
        """Create TTL from days."""
        return cls(days * 86400)

    @classmethod
    def max(cls) -> "TTL":
        """The never-refetch sentinel."""
        return cls(MAX_CACHE_TIME)

    @property
    def is_max(self) -> bool:
        return self.seconds == MAX_CACHE_TIME

    def is_expired(self, timestamp: float, now: float) -> bool:
        """True when a value stamped at ``timestamp`` is stale at ``now``."""
        if self.is_max:
            return False
        return now - timestamp >= self.seconds

    def __str__(self) -> str:
        return "max" if self.is_max else f"{self.seconds}s"


@dataclass(frozen=True)
class CacheKey:
    """
    Immutable cache key value object.

    Identifies a Cache Entry by (cache type, identifier).
    """

    cache_type: CacheType
    identifier: str

    def __post_init__(self) -> None:
        """Validate cache key format."""
        if not self.identifier:
            raise ValueError("Cache key identifier cannot be empty")

        if len(self.identifier) > 250:
            raise ValueError("Cache key too long (max 250 characters)")

    @property
    def value(self) -> str:
        return f"{self.cache_type.value}:{self.identifier}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MappingKey:
    """Identifies an Identifier Mapping entry by (kind, alias)."""

    kind: MappingKind
    alias: str

    def __post_init__(self) -> None:
        if not self.alias:
            raise ValueError("Mapping alias cannot be empty")

    @property
    def value(self) -> str:
        return f"mapping:{self.kind.value}:{self.alias}"

    def __str__(self) -> str:
        return self.value
