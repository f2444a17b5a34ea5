"""Unit tests for input detection and lookup keys."""

import pytest

from hypixel_resolver.domain.lookup import (
    ByUuid,
    InputType,
    ensure_no_dashes_uuid,
    is_valid_guild_id,
    is_valid_uuid,
)
from hypixel_resolver.domain.resources.entities import Player


class TestInputType:
    """Test InputType detection."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("069a79f444e94726a5befca90e38aaf5", InputType.UUID),
            ("069a79f4-44e9-4726-a5be-fca90e38aaf5", InputType.UUID),
            ("Notch", InputType.USERNAME),
            ("a_b_c", InputType.USERNAME),
            ("this_name_is_too_long", None),
            ("bad name", None),
            ("", None),
            (None, None),
            (42, None),
        ],
    )
    def test_detection(self, value, expected):
        assert InputType.of(value) is expected

    def test_player_object(self):
        player = Player(identifier="069a79f444e94726a5befca90e38aaf5")
        assert InputType.of(player) is InputType.PLAYER_OBJECT


def test_ensure_no_dashes_uuid():
    assert (
        ensure_no_dashes_uuid("069A79F4-44E9-4726-A5BE-FCA90E38AAF5")
        == "069a79f444e94726a5befca90e38aaf5"
    )


def test_validators():
    assert is_valid_uuid("069a79f444e94726a5befca90e38aaf5")
    assert not is_valid_uuid("Notch")
    assert is_valid_guild_id("5363aa5ced50ef8eaf2a7b59")
    assert not is_valid_guild_id("Hypixel")
    assert not is_valid_guild_id(None)


def test_lookups_are_value_objects():
    assert ByUuid("a") == ByUuid("a")
    with pytest.raises(AttributeError):
        ByUuid("a").uuid = "b"
