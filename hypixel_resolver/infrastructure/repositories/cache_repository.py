"""
Cache Repository Implementations

Infrastructure implementations of the cache repository interface:
in-memory, Redis-backed and flat-file stores, plus a factory that picks
one from settings. Records are stored as-is; staleness is judged by the
caller at read time, so nothing is evicted here.
"""

import json
import os
import time
from abc import abstractmethod
from pathlib import Path
from typing import Optional, Dict, Any
from urllib.parse import quote
from uuid import uuid4

import aiofiles
import aiofiles.os
import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError

from ...core.config import Settings, get_settings
from ...core.exceptions import CacheStoreException, ConfigurationException
from ...domain.cache.entities import CachePolicy, IdentifierMapping
from ...domain.cache.repository_interfaces import CacheRepository
from ...domain.cache.value_objects import CacheKey, CacheType, MappingKey, MappingKind
from ...domain.lookup import InputType
from ...domain.resources.entities import Guild, HypixelObject, Player

logger = structlog.get_logger(__name__)


class EnrichingCacheRepository(CacheRepository):
    """
    Shared save path for concrete stores.

    Saving a Player also records its ``name -> uuid`` mapping and saving a
    Guild records its ``name -> id`` mapping, stamped with the record time.
    """

    async def save_record(self, record: HypixelObject) -> HypixelObject:
        await self._store_record(record)
        await self._enrich(record)
        return record

    async def _enrich(self, record: HypixelObject) -> None:
        if isinstance(record, Player):
            name = record.name_lowercase
            if name and InputType.of(name) is InputType.USERNAME:
                await self.save_mapping(
                    IdentifierMapping.create(
                        MappingKind.UUID, name, record.uuid, record.timestamp
                    )
                )
        elif isinstance(record, Guild):
            name = record.name_lower
            if name:
                await self.save_mapping(
                    IdentifierMapping.create(
                        MappingKind.GUILD_BY_NAME, name, record.guild_id, record.timestamp
                    )
                )

    @abstractmethod
    async def _store_record(self, record: HypixelObject) -> None:
        """Write the record under its own cache key."""
        pass


class InMemoryCacheRepository(EnrichingCacheRepository):
    """
    Process-local store.

    Holds record objects by reference; suitable for tests and short-lived
    processes. State is not shared between processes.
    """

    def __init__(self, policy: Optional[CachePolicy] = None):
        super().__init__(policy)
        self._records: Dict[CacheKey, HypixelObject] = {}
        self._mappings: Dict[MappingKey, IdentifierMapping] = {}

    async def get_record(
        self, cache_type: CacheType, identifier: str
    ) -> Optional[HypixelObject]:
        return self._records.get(CacheKey(cache_type, identifier))

    async def _store_record(self, record: HypixelObject) -> None:
        self._records[record.get_key()] = record

    async def get_mapping(
        self, kind: MappingKind, alias: str
    ) -> Optional[IdentifierMapping]:
        return self._mappings.get(MappingKey(kind, alias))

    async def save_mapping(self, mapping: IdentifierMapping) -> None:
        self._mappings[mapping.get_key()] = mapping

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def health_check(self) -> Dict[str, Any]:
        return {
            "backend": "memory",
            "status": "healthy",
            "records": len(self._records),
            "mappings": len(self._mappings),
        }


class RedisCacheRepository(EnrichingCacheRepository):
    """Redis implementation of the cache repository."""

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "hypixel",
        policy: Optional[CachePolicy] = None,
        client: Optional[redis.Redis] = None,
    ):
        super().__init__(policy)
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        return self._client

    def _k(self, key: Any) -> str:
        """Compose namespaced key."""
        return f"{self.key_prefix}:{key.value}"

    async def _get_json(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self.client.get(key)
        except RedisError as e:
            logger.exception("Failed to read cache entry", key=key)
            raise CacheStoreException(
                f"Failed to read cache entry: {e}", "get", key, e
            ) from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise CacheStoreException(
                f"Corrupt cache entry: {e}", "decode", key, e
            ) from e

    async def _set_json(self, key: str, payload: Dict[str, Any]) -> None:
        try:
            await self.client.set(key, json.dumps(payload, default=str))
        except RedisError as e:
            logger.exception("Failed to write cache entry", key=key)
            raise CacheStoreException(
                f"Failed to write cache entry: {e}", "set", key, e
            ) from e

    async def get_record(
        self, cache_type: CacheType, identifier: str
    ) -> Optional[HypixelObject]:
        payload = await self._get_json(self._k(CacheKey(cache_type, identifier)))
        return HypixelObject.from_dict(payload) if payload else None

    async def _store_record(self, record: HypixelObject) -> None:
        await self._set_json(self._k(record.get_key()), record.to_dict())
        logger.debug("Saved cache record", key=record.get_key().value)

    async def get_mapping(
        self, kind: MappingKind, alias: str
    ) -> Optional[IdentifierMapping]:
        payload = await self._get_json(self._k(MappingKey(kind, alias)))
        return IdentifierMapping.from_dict(payload) if payload else None

    async def save_mapping(self, mapping: IdentifierMapping) -> None:
        await self._set_json(self._k(mapping.get_key()), mapping.to_dict())

    async def initialize(self) -> None:
        """Verify connectivity early."""
        try:
            await self.client.ping()
        except RedisError as e:
            raise CacheStoreException(
                f"Redis is not reachable: {e}", "ping", None, e
            ) from e
        logger.info("Redis cache repository initialized", redis_url=self.redis_url)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def health_check(self) -> Dict[str, Any]:
        start_time = time.time()
        try:
            await self.client.ping()
            status = "healthy"
        except RedisError as e:
            logger.warning("Redis health check failed", error=str(e))
            status = "unhealthy"
        return {
            "backend": "redis",
            "status": status,
            "response_time_ms": (time.time() - start_time) * 1000,
        }


class FlatFileCacheRepository(EnrichingCacheRepository):
    """
    Flat-file implementation of the cache repository.

    Layout: ``<root>/records/<cache type>/<identifier>.json`` and
    ``<root>/mappings/<kind>/<alias>.json``.
    """

    def __init__(self, directory: str, policy: Optional[CachePolicy] = None):
        super().__init__(policy)
        self.root = Path(directory)

    @staticmethod
    def _file_name(name: str) -> str:
        return quote(name, safe="") + ".json"

    def _record_path(self, key: CacheKey) -> Path:
        return self.root / "records" / key.cache_type.value / self._file_name(key.identifier)

    def _mapping_path(self, key: MappingKey) -> Path:
        return self.root / "mappings" / key.kind.value / self._file_name(key.alias)

    async def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        try:
            if not await aiofiles.os.path.exists(path):
                return None
            async with aiofiles.open(path, "r", encoding="utf-8") as handle:
                return json.loads(await handle.read())
        except (OSError, ValueError) as e:
            raise CacheStoreException(
                f"Failed to read cache file: {e}", "read", str(path), e
            ) from e

    async def _write(self, path: Path, payload: Dict[str, Any]) -> None:
        # One temp file per write; writers to the same path may overlap
        tmp_path = path.with_name(f"{path.name}.{uuid4().hex}.tmp")
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as handle:
                await handle.write(json.dumps(payload, default=str))
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            raise CacheStoreException(
                f"Failed to write cache file: {e}", "write", str(path), e
            ) from e

    async def get_record(
        self, cache_type: CacheType, identifier: str
    ) -> Optional[HypixelObject]:
        payload = await self._read(self._record_path(CacheKey(cache_type, identifier)))
        return HypixelObject.from_dict(payload) if payload else None

    async def _store_record(self, record: HypixelObject) -> None:
        await self._write(self._record_path(record.get_key()), record.to_dict())

    async def get_mapping(
        self, kind: MappingKind, alias: str
    ) -> Optional[IdentifierMapping]:
        payload = await self._read(self._mapping_path(MappingKey(kind, alias)))
        return IdentifierMapping.from_dict(payload) if payload else None

    async def save_mapping(self, mapping: IdentifierMapping) -> None:
        await self._write(self._mapping_path(mapping.get_key()), mapping.to_dict())

    async def initialize(self) -> None:
        try:
            await aiofiles.os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            raise CacheStoreException(
                f"Cache directory is not usable: {e}", "mkdir", str(self.root), e
            ) from e
        logger.info("Flat-file cache repository initialized", directory=str(self.root))

    async def close(self) -> None:
        return None

    async def health_check(self) -> Dict[str, Any]:
        writable = os.access(self.root, os.W_OK) if self.root.exists() else False
        return {
            "backend": "file",
            "status": "healthy" if writable else "unhealthy",
            "directory": str(self.root),
        }


def create_cache_repository(settings: Optional[Settings] = None) -> CacheRepository:
    """Build the cache repository selected by ``CACHE_BACKEND``."""
    settings = settings or get_settings()
    policy = CachePolicy.from_seconds(settings.cache_times())

    if settings.CACHE_BACKEND == "memory":
        return InMemoryCacheRepository(policy=policy)
    if settings.CACHE_BACKEND == "redis":
        return RedisCacheRepository(
            redis_url=settings.REDIS_URL,
            key_prefix=settings.CACHE_KEY_PREFIX,
            policy=policy,
        )
    if settings.CACHE_BACKEND == "file":
        return FlatFileCacheRepository(settings.CACHE_DIRECTORY, policy=policy)

    raise ConfigurationException(
        f"Unsupported cache backend: {settings.CACHE_BACKEND}", "CACHE_BACKEND"
    )
