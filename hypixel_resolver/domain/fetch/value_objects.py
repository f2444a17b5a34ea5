"""
Fetch Value Objects

Fetch types, request parameter names, and the tagged fetch outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any


class FetchType(str, Enum):
    """Remote endpoints, valued by their path relative to the API root."""

    PLAYER = "player"
    GUILD = "guild"
    FIND_GUILD = "findGuild"
    SESSION = "session"
    FRIENDS = "friends"
    BOOSTERS = "boosters"
    LEADERBOARDS = "leaderboards"
    KEY = "key"
    WATCHDOG_STATS = "watchdogstats"

    @property
    def endpoint(self) -> str:
        return self.value


class FetchParam:
    """Query parameter names understood by the remote service."""

    PLAYER_BY_UUID = "uuid"
    PLAYER_BY_NAME = "name"
    GUILD_BY_ID = "id"
    GUILD_BY_PLAYER_UUID = "byUuid"
    GUILD_BY_NAME = "byName"
    SESSION_BY_UUID = "uuid"
    FRIENDS_BY_UUID = "uuid"


@dataclass
class FetchResponse:
    """
    Outcome of one remote call.

    Either a success carrying the decoded body, or a failure carrying
    whatever diagnostics the transport produced. Never silently empty.
    """

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    status_code: Optional[int] = None
    cause: Optional[str] = None
    throttled: bool = False

    @classmethod
    def ok(cls, data: Dict[str, Any], status_code: int = 200) -> "FetchResponse":
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def failure(
        cls,
        cause: str,
        status_code: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
        throttled: bool = False,
    ) -> "FetchResponse":
        return cls(
            success=False,
            data=data or {},
            status_code=status_code,
            cause=cause,
            throttled=throttled,
        )

    def was_successful(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.success:
            return f"FetchResponse(success, status={self.status_code})"
        return f"FetchResponse(failure, status={self.status_code}, cause={self.cause!r})"
