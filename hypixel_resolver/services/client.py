"""
Hypixel Client

Caller-facing facade. Validates the API key, wires the fetcher, cache
repository and resolvers fixed at construction, and exposes one entry
point per entity. Every getter returns a record, a failed
FetchResponse, or None (invalid input or resolved negative).
"""

import hashlib
import time
from typing import Any, Callable, Dict, Optional

import structlog

from ..core.config import Settings, get_settings
from ..core.exceptions import InvalidApiKeyException, NoApiKeyException
from ..domain.cache.repository_interfaces import CacheRepository
from ..domain.cache.value_objects import CacheType
from ..domain.fetch.interfaces import Fetcher
from ..domain.fetch.value_objects import FetchParam, FetchResponse, FetchType
from ..domain.lookup import (
    ByName,
    ByPlayer,
    ByUnknown,
    ByUuid,
    GuildLookup,
    PlayerLookup,
    PlayerRefLookup,
    ensure_no_dashes_uuid,
    is_valid_uuid,
)
from ..domain.resources.entities import HypixelObject
from ..infrastructure.http.fetcher import HttpxFetcher
from ..infrastructure.repositories.cache_repository import create_cache_repository
from ..monitoring.metrics import ResolutionMetrics
from .resolution import (
    GuildResolver,
    KeyedLock,
    Provider,
    Resolution,
    ResolutionOrchestrator,
    UUIDResolver,
)

logger = structlog.get_logger(__name__)

# Identifier of the single cache entry held by global resources
GLOBAL_IDENTIFIER = "global"


class HypixelClient:
    """
    Access layer for the statistics API.

    Usage::

        async with HypixelClient(api_key) as client:
            player = HypixelClient.ignore_response(
                await client.get_player(ByName("Notch"))
            )
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        fetcher: Optional[Fetcher] = None,
        cache: Optional[CacheRepository] = None,
        provider: Optional[Provider] = None,
        metrics: Optional[ResolutionMetrics] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or get_settings()
        api_key = api_key if api_key is not None else self.settings.HYPIXEL_API_KEY
        if api_key is None:
            raise NoApiKeyException()
        if not is_valid_uuid(api_key):
            raise InvalidApiKeyException()
        self.api_key = api_key
        # Key info entries are keyed by this digest, never the raw key
        self.key_digest = hashlib.sha256(api_key.encode("utf-8")).hexdigest()

        self.fetcher = fetcher or HttpxFetcher(api_key, settings=self.settings)
        self.cache = cache or create_cache_repository(self.settings)
        self.provider = provider or Provider()
        self.metrics = metrics or ResolutionMetrics()
        self.clock = clock

        locks = KeyedLock()
        self.orchestrator = ResolutionOrchestrator(
            self.cache, metrics=self.metrics, locks=locks, clock=clock
        )
        self.uuid_resolver = UUIDResolver(
            self.cache,
            self.fetcher,
            profile_url=self.settings.MOJANG_PROFILE_URL,
            metrics=self.metrics,
            locks=locks,
            clock=clock,
        )
        self.guild_resolver = GuildResolver(
            self.cache,
            self.fetcher,
            self.orchestrator,
            self.uuid_resolver,
            provider=self.provider,
            locks=locks,
            clock=clock,
        )

    async def initialize(self) -> None:
        await self.cache.initialize()
        logger.info("Hypixel client initialized", cache_backend=type(self.cache).__name__)

    async def aclose(self) -> None:
        await self.fetcher.close()
        await self.cache.close()

    async def __aenter__(self) -> "HypixelClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # Result helpers

    @staticmethod
    def ignore_response(result: Any) -> Optional[HypixelObject]:
        """The record, or None when the result is a failure or empty."""
        return result if isinstance(result, HypixelObject) else None

    @staticmethod
    def get_response(result: Any) -> Optional[FetchResponse]:
        """The failure returned in place of a record, or attached to one."""
        if isinstance(result, FetchResponse):
            return result
        if isinstance(result, HypixelObject):
            return result.response
        return None

    # Cache policy

    def reset_uuid_circuit(self) -> None:
        self.uuid_resolver.reset_circuit()

    # Extra side channel

    async def add_extra(self, record: HypixelObject, values: Dict[str, Any]) -> HypixelObject:
        """Attach caller metadata to ``record`` and persist it so it survives refreshes."""
        return await self.orchestrator.add_extra(record, values)

    # UUIDs

    async def get_uuid(self, username: str) -> Optional[str]:
        return await self.uuid_resolver.resolve(username)

    async def get_uuid_from_var(self, value: Any) -> Optional[str]:
        """Uuid for a uuid string, username or Player record; None if unrecognised."""
        return await self.uuid_resolver.resolve_any(value)

    async def _player_uuid(self, lookup: PlayerLookup) -> Optional[str]:
        if isinstance(lookup, ByUuid):
            return ensure_no_dashes_uuid(lookup.uuid) if is_valid_uuid(lookup.uuid) else None
        if isinstance(lookup, ByName):
            return await self.uuid_resolver.resolve(lookup.name)
        if isinstance(lookup, ByPlayer):
            return lookup.player.uuid
        if isinstance(lookup, ByUnknown):
            return await self.uuid_resolver.resolve_any(lookup.value)
        raise TypeError(f"Unsupported player lookup: {lookup!r}")

    async def _player_ref_uuid(self, lookup: PlayerRefLookup) -> Optional[str]:
        """Uuid for a by-uuid or by-player lookup; other forms are invalid input."""
        if not isinstance(lookup, (ByUuid, ByPlayer)):
            logger.debug("Unsupported player reference", lookup=type(lookup).__name__)
            return None
        return await self._player_uuid(lookup)

    # Entities

    async def get_player(self, lookup: PlayerLookup) -> Resolution:
        uuid = await self._player_uuid(lookup)
        if uuid is None:
            return None
        return await self.orchestrator.handle(
            CacheType.PLAYER,
            uuid,
            lambda: self.fetcher.fetch(FetchType.PLAYER, {FetchParam.PLAYER_BY_UUID: uuid}),
            lambda body: self.provider.build_player(uuid, body),
        )

    async def get_guild(self, lookup: GuildLookup) -> Resolution:
        return await self.guild_resolver.resolve(lookup)

    async def get_session(self, lookup: PlayerRefLookup) -> Resolution:
        uuid = await self._player_ref_uuid(lookup)
        if uuid is None:
            return None
        return await self.orchestrator.handle(
            CacheType.SESSION,
            uuid,
            lambda: self.fetcher.fetch(FetchType.SESSION, {FetchParam.SESSION_BY_UUID: uuid}),
            lambda body: self.provider.build_session(uuid, body),
        )

    async def get_friends(self, lookup: PlayerRefLookup) -> Resolution:
        uuid = await self._player_ref_uuid(lookup)
        if uuid is None:
            return None
        return await self.orchestrator.handle(
            CacheType.FRIENDS,
            uuid,
            lambda: self.fetcher.fetch(FetchType.FRIENDS, {FetchParam.FRIENDS_BY_UUID: uuid}),
            lambda body: self.provider.build_friends(uuid, body),
        )

    async def _get_global(
        self,
        cache_type: CacheType,
        fetch_type: FetchType,
        build: Callable[[str, Dict[str, Any]], Optional[HypixelObject]],
        identifier: str = GLOBAL_IDENTIFIER,
    ) -> Resolution:
        return await self.orchestrator.handle(
            cache_type,
            identifier,
            lambda: self.fetcher.fetch(fetch_type),
            lambda body: build(identifier, body),
        )

    async def get_boosters(self) -> Resolution:
        return await self._get_global(
            CacheType.BOOSTERS, FetchType.BOOSTERS, self.provider.build_boosters
        )

    async def get_leaderboards(self) -> Resolution:
        return await self._get_global(
            CacheType.LEADERBOARDS, FetchType.LEADERBOARDS, self.provider.build_leaderboards
        )

    async def get_key_info(self) -> Resolution:
        return await self._get_global(
            CacheType.KEY_INFO,
            FetchType.KEY,
            self.provider.build_key_info,
            identifier=self.key_digest,
        )

    async def get_watchdog_stats(self) -> Resolution:
        return await self._get_global(
            CacheType.WATCHDOG, FetchType.WATCHDOG_STATS, self.provider.build_watchdog_stats
        )
