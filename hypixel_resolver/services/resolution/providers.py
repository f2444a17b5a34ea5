"""
Record Providers

Turns a successful response body into a Domain Record. Each builder
returns None when the body does not carry the entity, which the
orchestrator treats as "nothing to store".
"""

from typing import Optional, Dict, Any

from ...domain.resources.entities import (
    Boosters,
    Friends,
    Guild,
    KeyInfo,
    Leaderboards,
    Player,
    Session,
    WatchdogStats,
)

# Body keys that describe the response rather than the entity
ENVELOPE_KEYS = ("success", "cause", "throttle")


class Provider:
    """
    Default record builders.

    Subclass and override a builder to customise how a record type is
    constructed; the client takes the provider at construction.
    """

    @staticmethod
    def _section(body: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
        section = body.get(key)
        return section if isinstance(section, dict) else None

    @staticmethod
    def _strip_envelope(body: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in body.items() if k not in ENVELOPE_KEYS}

    def build_player(self, uuid: str, body: Dict[str, Any]) -> Optional[Player]:
        section = self._section(body, "player")
        if section is None:
            return None
        return Player(identifier=uuid, data=section)

    def build_guild(self, guild_id: str, body: Dict[str, Any]) -> Optional[Guild]:
        section = self._section(body, "guild")
        if section is None:
            return None
        return Guild(identifier=guild_id, data=section)

    def build_session(self, uuid: str, body: Dict[str, Any]) -> Optional[Session]:
        section = self._section(body, "session")
        if section is None:
            return None
        return Session(identifier=uuid, data=section)

    def build_friends(self, uuid: str, body: Dict[str, Any]) -> Optional[Friends]:
        records = body.get("records")
        if not isinstance(records, list):
            return None
        return Friends(identifier=uuid, data={"records": records})

    def build_boosters(self, identifier: str, body: Dict[str, Any]) -> Optional[Boosters]:
        if not isinstance(body.get("boosters"), list):
            return None
        return Boosters(identifier=identifier, data=self._strip_envelope(body))

    def build_leaderboards(
        self, identifier: str, body: Dict[str, Any]
    ) -> Optional[Leaderboards]:
        if not isinstance(body.get("leaderboards"), dict):
            return None
        return Leaderboards(identifier=identifier, data=self._strip_envelope(body))

    def build_key_info(self, key: str, body: Dict[str, Any]) -> Optional[KeyInfo]:
        section = self._section(body, "record")
        if section is None:
            return None
        return KeyInfo(identifier=key, data=section)

    def build_watchdog_stats(
        self, identifier: str, body: Dict[str, Any]
    ) -> Optional[WatchdogStats]:
        data = self._strip_envelope(body)
        if not data:
            return None
        return WatchdogStats(identifier=identifier, data=data)
