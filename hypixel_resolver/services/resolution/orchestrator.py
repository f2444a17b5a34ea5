"""
Resolution Orchestrator

The cache-check / fetch / merge / store protocol shared by every
resolvable entity. Owns no persistent state: records flow in from the
cache repository and the fetcher and flow back out to the caller.
"""

import time
from typing import Awaitable, Callable, Dict, Any, Optional, Union

import structlog
from opentelemetry import trace

from ...domain.cache.repository_interfaces import CacheRepository
from ...domain.cache.value_objects import CacheKey, CacheType
from ...domain.fetch.value_objects import FetchResponse
from ...domain.resources.entities import HypixelObject
from ...monitoring.metrics import ResolutionMetrics, ResolutionOutcome
from .key_locks import KeyedLock

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

FetchFn = Callable[[], Awaitable[FetchResponse]]
BuildFn = Callable[[Dict[str, Any]], Optional[HypixelObject]]
Resolution = Union[HypixelObject, FetchResponse, None]


class ResolutionOrchestrator:
    """
    Resolve-or-refresh for a single (cache type, identifier).

    Outcomes:
      * fresh cached record, returned without a fetch
      * refreshed record carrying the previous record's ``extra``
      * stale cached record with the failed response attached
      * the failed FetchResponse itself when nothing was cached
      * None when the fetch succeeded but carried no entity and nothing
        was cached
    """

    def __init__(
        self,
        cache: CacheRepository,
        metrics: Optional[ResolutionMetrics] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache
        self.metrics = metrics or ResolutionMetrics()
        self.locks = locks or KeyedLock()
        self.clock = clock

    async def handle(
        self,
        cache_type: CacheType,
        identifier: str,
        fetch_fn: FetchFn,
        build_fn: BuildFn,
    ) -> Resolution:
        with tracer.start_as_current_span("resolution.handle") as span:
            span.set_attribute("cache_type", cache_type.value)
            span.set_attribute("identifier", identifier)

            async with self.locks.hold(CacheKey(cache_type, identifier)):
                result, outcome = await self._resolve(
                    cache_type, identifier, fetch_fn, build_fn
                )

            span.set_attribute("outcome", outcome)
            self.metrics.record_resolution(cache_type.value, outcome)
            return result

    async def add_extra(
        self, record: HypixelObject, values: Dict[str, Any]
    ) -> HypixelObject:
        """
        Merge ``values`` into a record's ``extra`` and persist it.

        The merge is applied to the stored copy as well, so metadata
        survives later refreshes on stores that do not hold records by
        reference.
        """
        async with self.locks.hold(record.get_key()):
            record.add_extra(values)
            stored = await self.cache.get_record(record.CACHE_TYPE, record.identifier)
            if stored is None or stored is record:
                target = record
            else:
                stored.add_extra(values)
                target = stored
            saved = await self.cache.save_record(target)

        logger.info(
            "Saved record extra",
            cache_type=record.CACHE_TYPE.value,
            keys=sorted(values),
        )
        return saved

    async def _resolve(
        self,
        cache_type: CacheType,
        identifier: str,
        fetch_fn: FetchFn,
        build_fn: BuildFn,
    ):
        cached = await self.cache.get_record(cache_type, identifier)
        if cached is not None and not cached.is_cache_expired(
            self.cache.policy, self.clock()
        ):
            logger.debug("Cache hit", cache_type=cache_type.value, identifier=identifier)
            return cached, ResolutionOutcome.HIT

        logger.info("Fetching record", cache_type=cache_type.value, identifier=identifier)
        response = await fetch_fn()

        if not response.was_successful():
            logger.warning(
                "Refresh failed",
                cache_type=cache_type.value,
                identifier=identifier,
                status_code=response.status_code,
                cause=response.cause,
                throttled=response.throttled,
                has_cached=cached is not None,
            )
            if cached is None:
                return response, ResolutionOutcome.ERROR
            cached.attach_response(response)
            return cached, ResolutionOutcome.STALE

        fetched = build_fn(response.data)
        if fetched is None:
            logger.info(
                "Response carried no record",
                cache_type=cache_type.value,
                identifier=identifier,
            )
            return cached, ResolutionOutcome.EMPTY

        if cached is not None:
            fetched.set_extra(cached.extra)

        stored = await self.cache.save_record(fetched.handle_new(self.clock()))
        return stored, ResolutionOutcome.REFRESHED
