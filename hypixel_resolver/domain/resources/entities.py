"""
Resource Domain Entities

Domain Records resolved from the statistics API. Every record carries the
timestamp of its last successful fetch, its payload, an ``extra`` side
channel that survives refreshes, and the response of the most recent
failed refresh, if any.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, ClassVar, Type

from ..cache.entities import CachePolicy
from ..cache.value_objects import CacheKey, CacheType
from ..fetch.value_objects import FetchResponse


@dataclass
class HypixelObject:
    """
    Base Domain Record.

    ``identifier`` is the canonical key the record was resolved under.
    """

    CACHE_TYPE: ClassVar[CacheType] = CacheType.OVERALL

    identifier: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = 0.0
    extra: Dict[str, Any] = field(default_factory=dict)
    response: Optional[FetchResponse] = field(default=None, compare=False, repr=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a payload field."""
        return self.data.get(key, default)

    def get_key(self) -> CacheKey:
        """Get cache key for this record."""
        return CacheKey(self.CACHE_TYPE, self.identifier)

    def is_cache_expired(self, policy: CachePolicy, now: float) -> bool:
        """Check if the record is stale under ``policy``."""
        return policy.get(self.CACHE_TYPE).is_expired(self.timestamp, now)

    def handle_new(self, now: float) -> "HypixelObject":
        """Stamp a freshly fetched record before it is persisted."""
        self.timestamp = now
        self.response = None
        return self

    def attach_response(self, response: FetchResponse) -> None:
        """Keep the failed refresh response for diagnostic inspection."""
        self.response = response

    def set_extra(self, extra: Dict[str, Any]) -> None:
        self.extra = dict(extra)

    def add_extra(self, values: Dict[str, Any]) -> None:
        """Merge caller metadata into the side channel."""
        self.extra.update(values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for persistence. The attached response is not persisted."""
        return {
            "record_type": self.CACHE_TYPE.value,
            "identifier": self.identifier,
            "data": self.data,
            "timestamp": self.timestamp,
            "extra": self.extra,
        }

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> "HypixelObject":
        """Rebuild the concrete record type from persisted data."""
        record_cls = RECORD_TYPES[CacheType(payload["record_type"])]
        return record_cls(
            identifier=payload["identifier"],
            data=payload.get("data") or {},
            timestamp=float(payload.get("timestamp", 0.0)),
            extra=payload.get("extra") or {},
        )


@dataclass
class Player(HypixelObject):
    """Player record, keyed by dashless uuid."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.PLAYER

    @property
    def uuid(self) -> str:
        return self.identifier

    @property
    def name(self) -> Optional[str]:
        return self.data.get("displayname")

    @property
    def name_lowercase(self) -> Optional[str]:
        name = self.data.get("playername") or self.name
        return name.lower() if name else None


@dataclass
class Guild(HypixelObject):
    """Guild record, keyed by guild id."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.GUILD

    @property
    def guild_id(self) -> str:
        return self.identifier

    @property
    def name(self) -> Optional[str]:
        return self.data.get("name")

    @property
    def name_lower(self) -> Optional[str]:
        name = self.data.get("name_lower") or self.name
        return name.lower() if name else None

    @property
    def tag(self) -> Optional[str]:
        return self.data.get("tag")

    @property
    def members(self) -> List[Dict[str, Any]]:
        return self.data.get("members") or []

    def has_member(self, uuid: str) -> bool:
        return any(member.get("uuid") == uuid for member in self.members)


@dataclass
class Session(HypixelObject):
    """Online session of a player, keyed by player uuid."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.SESSION

    @property
    def online(self) -> bool:
        return bool(self.data.get("online", False))

    @property
    def game_type(self) -> Optional[str]:
        return self.data.get("gameType")


@dataclass
class Friends(HypixelObject):
    """Friend list of a player, keyed by player uuid."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.FRIENDS

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self.data.get("records") or []

    def friend_uuids(self) -> List[str]:
        uuids = []
        for record in self.records:
            sender, receiver = record.get("uuidSender"), record.get("uuidReceiver")
            uuids.append(receiver if sender == self.identifier else sender)
        return uuids


@dataclass
class Boosters(HypixelObject):
    """Active network boosters (single global entry)."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.BOOSTERS

    @property
    def boosters(self) -> List[Dict[str, Any]]:
        return self.data.get("boosters") or []


@dataclass
class Leaderboards(HypixelObject):
    """Leaderboard snapshot (single global entry)."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.LEADERBOARDS

    @property
    def leaderboards(self) -> Dict[str, Any]:
        return self.data.get("leaderboards") or {}


@dataclass
class KeyInfo(HypixelObject):
    """Metadata of the API key in use, keyed by the key."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.KEY_INFO

    @property
    def owner(self) -> Optional[str]:
        return self.data.get("owner")

    @property
    def total_queries(self) -> int:
        return int(self.data.get("totalQueries", 0))

    @property
    def queries_in_past_min(self) -> int:
        return int(self.data.get("queriesInPastMin", 0))


@dataclass
class WatchdogStats(HypixelObject):
    """Anti-cheat statistics (single global entry)."""

    CACHE_TYPE: ClassVar[CacheType] = CacheType.WATCHDOG

    @property
    def total_bans(self) -> int:
        return int(self.data.get("watchdog_total", 0))

    @property
    def staff_total_bans(self) -> int:
        return int(self.data.get("staff_total", 0))


RECORD_TYPES: Dict[CacheType, Type[HypixelObject]] = {
    record_cls.CACHE_TYPE: record_cls
    for record_cls in (
        Player,
        Guild,
        Session,
        Friends,
        Boosters,
        Leaderboards,
        KeyInfo,
        WatchdogStats,
    )
}
