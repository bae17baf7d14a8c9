from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from schnose_common.models import Course, GlobalMap, Mapper, SteamId, Tier


def _lionharder() -> GlobalMap:
    return GlobalMap(
        id=992,
        name="kz_lionharder",
        tier=Tier.DEATH,
        is_global=True,
        courses=(Course(id=1770, stage=0, tier=Tier.DEATH), Course(id=1771, stage=1, tier=Tier.EXTREME)),
        kzt=True,
        skz=True,
        vnl=False,
        mappers=(Mapper(name="lion", steam_id=SteamId.parse("STEAM_1:1:16")),),
        approver_steam_id=SteamId.parse("STEAM_1:0:102468802"),
        filesize=75123456,
        created_on=datetime(2022, 11, 5, 18, 12, 40),
        updated_on=datetime(2022, 11, 6, 9, 0, 0),
        workshop_link=None,
    )


def test_global_map_links() -> None:
    global_map = _lionharder()

    assert global_map.kzgo_link == "https://kzgo.eu/maps/kz_lionharder"
    assert global_map.thumbnail == (
        "https://raw.githubusercontent.com/KZGlobalTeam/map-images/master/images/kz_lionharder.jpg"
    )
    assert list(global_map.mapper_steam_links()) == ["https://steamcommunity.com/profiles/76561197960265761"]
    assert global_map.approver_steam_link == "https://steamcommunity.com/profiles/76561198165203332"


def test_global_map_without_approver_has_no_approver_link() -> None:
    global_map = GlobalMap(
        id=1,
        name="kz_test",
        tier=Tier.EASY,
        is_global=False,
        kzt=False,
        skz=False,
        vnl=False,
        filesize=0,
        created_on=datetime(2020, 1, 1),
        updated_on=datetime(2020, 1, 1),
    )
    assert global_map.approver_steam_link is None
    assert list(global_map.mapper_steam_links()) == []


def test_global_map_is_immutable() -> None:
    global_map = _lionharder()
    with pytest.raises(FrozenInstanceError):
        global_map.name = "kz_other"  # type: ignore[misc]


def test_global_map_to_dict_uses_fixed_timestamp_pattern() -> None:
    payload = _lionharder().to_dict()

    assert payload["global"] is True
    assert payload["tier"] == 7
    assert payload["created_on"] == "2022-11-05T18:12:40"
    assert payload["updated_on"] == "2022-11-06T09:00:00"
    assert payload["approver_steam_id"] == "STEAM_1:0:102468802"
    assert payload["mappers"] == [{"name": "lion", "steam_id": "STEAM_1:1:16"}]
    assert payload["courses"][1] == {"id": 1771, "stage": 1, "tier": 6}
    assert payload["workshop_link"] is None


def test_global_map_from_dict_restores_to_dict_output() -> None:
    global_map = _lionharder()
    assert GlobalMap.from_dict(global_map.to_dict()) == global_map


def test_global_map_from_dict_rejects_bad_timestamp() -> None:
    payload = _lionharder().to_dict()
    payload["created_on"] = "2022-11-05 18:12:40"
    with pytest.raises(ValueError):
        GlobalMap.from_dict(payload)
