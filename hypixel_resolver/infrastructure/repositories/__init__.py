"""
Repository Infrastructure Module

Concrete cache stores and the settings-driven factory.
"""

from .cache_repository import (
    EnrichingCacheRepository,
    InMemoryCacheRepository,
    RedisCacheRepository,
    FlatFileCacheRepository,
    create_cache_repository,
)

__all__ = [
    "EnrichingCacheRepository",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "FlatFileCacheRepository",
    "create_cache_repository",
]
