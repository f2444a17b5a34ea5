"""
UUID Resolver

Username -> canonical uuid with a mapping cache, two external providers
tried in order, and a circuit breaker on the UUID cache time.
"""

import time
from typing import Any, Callable, Optional

import structlog
from opentelemetry import trace

from ...constants import MOJANG_PROFILE_URL
from ...domain.cache.entities import IdentifierMapping
from ...domain.cache.repository_interfaces import CacheRepository
from ...domain.cache.value_objects import CacheType, MappingKey, MappingKind, TTL
from ...domain.fetch.interfaces import Fetcher
from ...domain.fetch.value_objects import FetchParam, FetchType
from ...domain.lookup import InputType, ensure_no_dashes_uuid, is_valid_uuid
from ...monitoring.metrics import ResolutionMetrics, UUIDLookupSource
from .key_locks import KeyedLock

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class UUIDResolver:
    """
    Resolves a case-insensitive username to a dashless uuid.

    Resolution order: mapping cache, identity provider, player-by-name
    fetch. When both remote attempts fail the UUID cache time is set to
    the max sentinel. From then on every unmapped username resolves to a
    cached negative without any remote call until ``reset_circuit()``.
    """

    def __init__(
        self,
        cache: CacheRepository,
        fetcher: Fetcher,
        profile_url: str = MOJANG_PROFILE_URL,
        metrics: Optional[ResolutionMetrics] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.profile_url = profile_url
        self.metrics = metrics or ResolutionMetrics()
        self.locks = locks or KeyedLock()
        self.clock = clock

    @property
    def circuit_open(self) -> bool:
        return self.cache.policy.is_max(CacheType.UUID)

    def trip_circuit(self) -> None:
        self.cache.set_cache_time(CacheType.UUID, TTL.max())
        logger.warning("UUID lookup circuit opened")

    def reset_circuit(self) -> None:
        """Operator reset: restore the configured UUID cache time."""
        self.cache.reset_cache_time(CacheType.UUID)
        logger.info("UUID lookup circuit reset")

    async def resolve(self, username: str) -> Optional[str]:
        """Return the uuid for ``username``, or None if invalid or unresolvable."""
        if InputType.of(username) is not InputType.USERNAME:
            return None
        alias = username.lower()

        with tracer.start_as_current_span("resolution.uuid") as span:
            span.set_attribute("alias", alias)
            async with self.locks.hold(MappingKey(MappingKind.UUID, alias)):
                uuid, source = await self._resolve(alias)
            span.set_attribute("source", source)
            self.metrics.record_uuid_lookup(source)
            return uuid

    async def resolve_any(self, value: Any) -> Optional[str]:
        """Uuid for a uuid string, a username or a Player record."""
        input_type = InputType.of(value)
        if input_type is InputType.UUID:
            return ensure_no_dashes_uuid(value)
        if input_type is InputType.USERNAME:
            return await self.resolve(value)
        if input_type is InputType.PLAYER_OBJECT:
            return value.uuid
        return None

    async def _resolve(self, alias: str):
        mapping = await self.cache.get_mapping(MappingKind.UUID, alias)
        if mapping is not None and not mapping.is_expired(self.cache.policy, self.clock()):
            logger.debug("UUID mapping hit", alias=alias, negative=mapping.is_negative)
            return mapping.identifier, UUIDLookupSource.CACHE

        # Phase one: remote lookups, tripping the breaker if both fail
        if not self.circuit_open:
            uuid, source = await self._lookup_remote(alias)
            if uuid is not None:
                await self._save(alias, uuid)
                return uuid, source
            self.trip_circuit()
            source = UUIDLookupSource.UNRESOLVED
        else:
            source = UUIDLookupSource.CIRCUIT_OPEN

        # Phase two: breaker is open, record a durable negative
        await self._save(alias, None)
        return None, source

    async def _lookup_remote(self, alias: str):
        body = await self.fetcher.get_url_contents(self.profile_url.format(username=alias))
        if body and is_valid_uuid(body.get("id")):
            return ensure_no_dashes_uuid(body["id"]), UUIDLookupSource.MOJANG

        response = await self.fetcher.fetch(
            FetchType.PLAYER, {FetchParam.PLAYER_BY_NAME: alias}
        )
        if response.was_successful():
            player = response.data.get("player") or {}
            if is_valid_uuid(player.get("uuid")):
                return ensure_no_dashes_uuid(player["uuid"]), UUIDLookupSource.HYPIXEL

        logger.info("UUID lookup failed on every provider", alias=alias)
        return None, UUIDLookupSource.UNRESOLVED

    async def _save(self, alias: str, uuid: Optional[str]) -> None:
        await self.cache.save_mapping(
            IdentifierMapping.create(MappingKind.UUID, alias, uuid, self.clock())
        )
        logger.info("Saved UUID mapping", alias=alias, uuid=uuid)
