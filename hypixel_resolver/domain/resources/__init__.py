"""
Resource Domain Module

Domain Records returned by the resolver.
"""

from .entities import (
    HypixelObject,
    Player,
    Guild,
    Session,
    Friends,
    Boosters,
    Leaderboards,
    KeyInfo,
    WatchdogStats,
    RECORD_TYPES,
)

__all__ = [
    "HypixelObject",
    "Player",
    "Guild",
    "Session",
    "Friends",
    "Boosters",
    "Leaderboards",
    "KeyInfo",
    "WatchdogStats",
    "RECORD_TYPES",
]
