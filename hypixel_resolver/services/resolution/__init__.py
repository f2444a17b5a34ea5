"""
Resolution Services

Orchestrator, UUID resolution chain and guild indirection.
"""

from .guild_resolver import GuildResolver
from .key_locks import KeyedLock
from .orchestrator import Resolution, ResolutionOrchestrator
from .providers import Provider
from .uuid_resolver import UUIDResolver

__all__ = [
    "GuildResolver",
    "KeyedLock",
    "Provider",
    "Resolution",
    "ResolutionOrchestrator",
    "UUIDResolver",
]
