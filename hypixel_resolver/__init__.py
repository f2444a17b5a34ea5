"""
Hypixel Resolver

Cache-first access layer for the Hypixel statistics API.
"""

from .constants import APP_VERSION as __version__
from .core.config import Settings, get_settings
from .core.exceptions import (
    HypixelResolverException,
    InvalidApiKeyException,
    NoApiKeyException,
)
from .core.logging import configure_logging
from .domain.fetch.value_objects import FetchResponse
from .domain.lookup import ByGuildId, ByGuildName, ByName, ByPlayer, ByUnknown, ByUuid
from .domain.resources.entities import (
    Boosters,
    Friends,
    Guild,
    HypixelObject,
    KeyInfo,
    Leaderboards,
    Player,
    Session,
    WatchdogStats,
)
from .services.client import HypixelClient

__all__ = [
    "__version__",
    "HypixelClient",
    "Settings",
    "get_settings",
    "configure_logging",
    "HypixelResolverException",
    "NoApiKeyException",
    "InvalidApiKeyException",
    "FetchResponse",
    "ByUuid",
    "ByName",
    "ByPlayer",
    "ByUnknown",
    "ByGuildId",
    "ByGuildName",
    "HypixelObject",
    "Player",
    "Guild",
    "Session",
    "Friends",
    "Boosters",
    "Leaderboards",
    "KeyInfo",
    "WatchdogStats",
]
