"""
Lookup Keys

Input-type detection, uuid normalisation, and the tagged lookup variants
callers use to ask for an entity. Every variant is reduced to one
canonical identifier before the cache/fetch protocol runs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..constants import GUILD_ID_PATTERN, USERNAME_PATTERN, UUID_PATTERN
from .resources.entities import Player


class InputType(str, Enum):
    """Shapes a loosely typed lookup value can take."""

    UUID = "uuid"
    USERNAME = "username"
    PLAYER_OBJECT = "player_object"

    @classmethod
    def of(cls, value: Any) -> Optional["InputType"]:
        """Detect the input type of ``value``; None when unrecognised."""
        if isinstance(value, Player):
            return cls.PLAYER_OBJECT
        if not isinstance(value, str):
            return None
        if UUID_PATTERN.match(value):
            return cls.UUID
        if USERNAME_PATTERN.match(value):
            return cls.USERNAME
        return None


def ensure_no_dashes_uuid(uuid: str) -> str:
    """Strip dashes and lower-case a uuid."""
    return uuid.replace("-", "").lower()


def is_valid_uuid(value: Any) -> bool:
    return InputType.of(value) is InputType.UUID


def is_valid_guild_id(value: Any) -> bool:
    return isinstance(value, str) and bool(GUILD_ID_PATTERN.match(value))


@dataclass(frozen=True)
class ByUuid:
    """Player (or player-owned resource) by uuid."""

    uuid: str


@dataclass(frozen=True)
class ByName:
    """Player (or player-owned resource) by username."""

    name: str


@dataclass(frozen=True)
class ByPlayer:
    """Player-owned resource by a previously resolved Player record."""

    player: Player


@dataclass(frozen=True)
class ByUnknown:
    """Any of uuid, username or Player record; detected at resolution time."""

    value: Any


@dataclass(frozen=True)
class ByGuildId:
    """Guild by its canonical id."""

    guild_id: str


@dataclass(frozen=True)
class ByGuildName:
    """Guild by its (case-insensitive) name."""

    name: str


PlayerLookup = Union[ByUuid, ByName, ByPlayer, ByUnknown]
GuildLookup = Union[ByGuildId, ByGuildName, ByUuid, ByName, ByPlayer, ByUnknown]
PlayerRefLookup = Union[ByUuid, ByPlayer]
