"""
Guild Resolver

Reduces every guild lookup form (player uuid, username, player record,
guild name, guild id) to one guild id, then hands the id to the
orchestrator. Guild records are therefore cached under exactly one key
whatever alias was used to reach them.
"""

import time
from typing import Callable, Optional, Dict, Union

import structlog
from opentelemetry import trace

from ...domain.cache.entities import IdentifierMapping
from ...domain.cache.repository_interfaces import CacheRepository
from ...domain.cache.value_objects import CacheType, MappingKey, MappingKind
from ...domain.fetch.interfaces import Fetcher
from ...domain.fetch.value_objects import FetchParam, FetchResponse, FetchType
from ...domain.lookup import (
    ByGuildId,
    ByGuildName,
    ByName,
    ByPlayer,
    ByUnknown,
    ByUuid,
    GuildLookup,
    ensure_no_dashes_uuid,
    is_valid_guild_id,
    is_valid_uuid,
)
from .key_locks import KeyedLock
from .orchestrator import Resolution, ResolutionOrchestrator
from .providers import Provider
from .uuid_resolver import UUIDResolver

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class GuildResolver:
    """Indirect-key resolution for guilds."""

    def __init__(
        self,
        cache: CacheRepository,
        fetcher: Fetcher,
        orchestrator: ResolutionOrchestrator,
        uuid_resolver: UUIDResolver,
        provider: Optional[Provider] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.orchestrator = orchestrator
        self.uuid_resolver = uuid_resolver
        self.provider = provider or Provider()
        self.locks = locks or KeyedLock()
        self.clock = clock

    async def resolve(self, lookup: GuildLookup) -> Resolution:
        with tracer.start_as_current_span("resolution.guild") as span:
            span.set_attribute("lookup", type(lookup).__name__)

            if isinstance(lookup, ByGuildId):
                if not is_valid_guild_id(lookup.guild_id):
                    return None
                return await self.by_id(lookup.guild_id)

            if isinstance(lookup, ByGuildName):
                if not isinstance(lookup.name, str) or not lookup.name.strip():
                    return None
                name = lookup.name.strip().lower()
                return await self._via_mapping(
                    MappingKind.GUILD_BY_NAME, name, {FetchParam.GUILD_BY_NAME: name}
                )

            if isinstance(lookup, ByUuid):
                if not is_valid_uuid(lookup.uuid):
                    return None
                uuid = ensure_no_dashes_uuid(lookup.uuid)
            elif isinstance(lookup, ByName):
                uuid = await self.uuid_resolver.resolve(lookup.name)
            elif isinstance(lookup, ByPlayer):
                uuid = lookup.player.uuid
            elif isinstance(lookup, ByUnknown):
                uuid = await self.uuid_resolver.resolve_any(lookup.value)
            else:
                raise TypeError(f"Unsupported guild lookup: {lookup!r}")

            if uuid is None:
                return None
            return await self._via_mapping(
                MappingKind.GUILD_BY_PLAYER, uuid, {FetchParam.GUILD_BY_PLAYER_UUID: uuid}
            )

    async def by_id(self, guild_id: str) -> Resolution:
        return await self.orchestrator.handle(
            CacheType.GUILD,
            guild_id,
            lambda: self.fetcher.fetch(FetchType.GUILD, {FetchParam.GUILD_BY_ID: guild_id}),
            lambda body: self.provider.build_guild(guild_id, body),
        )

    async def _via_mapping(
        self, kind: MappingKind, alias: str, params: Dict[str, str]
    ) -> Resolution:
        guild_id = await self._guild_id_for(kind, alias, params)
        if guild_id is None or isinstance(guild_id, FetchResponse):
            return guild_id
        return await self.by_id(guild_id)

    async def _guild_id_for(
        self, kind: MappingKind, alias: str, params: Dict[str, str]
    ) -> Union[str, FetchResponse, None]:
        """Guild id for ``alias``: from the mapping cache, else via find-guild."""
        async with self.locks.hold(MappingKey(kind, alias)):
            mapping = await self.cache.get_mapping(kind, alias)
            if mapping is not None and not mapping.is_expired(
                self.cache.policy, self.clock()
            ):
                logger.debug(
                    "Guild mapping hit", kind=kind.value, alias=alias, guild_id=mapping.identifier
                )
                return mapping.identifier

            response = await self.fetcher.fetch(FetchType.FIND_GUILD, params)
            if not response.was_successful():
                logger.warning(
                    "Find guild failed", kind=kind.value, alias=alias, cause=response.cause
                )
                return response

            guild_id = response.data.get("guild")
            if not is_valid_guild_id(guild_id):
                guild_id = None

            await self.cache.save_mapping(
                IdentifierMapping.create(kind, alias, guild_id, self.clock())
            )
            logger.info("Saved guild mapping", kind=kind.value, alias=alias, guild_id=guild_id)
            return guild_id
