from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Mapping

from schnose_common.models.enums import Tier
from schnose_common.models.steam_id import SteamId
from schnose_common.utils.serde import deserialize_timestamp, serialize_timestamp

KZGO_MAP_URL = "https://kzgo.eu/maps/{name}"
MAP_THUMBNAIL_URL = "https://raw.githubusercontent.com/KZGlobalTeam/map-images/master/images/{name}.jpg"


@dataclass(frozen=True)
class Course:
    id: int
    stage: int
    tier: Tier

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "stage": self.stage, "tier": int(self.tier)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Course:
        return cls(id=int(payload["id"]), stage=int(payload["stage"]), tier=Tier(int(payload["tier"])))


@dataclass(frozen=True)
class Mapper:
    name: str
    steam_id: SteamId

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "steam_id": str(self.steam_id)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Mapper:
        return cls(name=str(payload["name"]), steam_id=SteamId.parse(payload["steam_id"]))


@dataclass(frozen=True)
class GlobalMap:
    """
    A KZ map as seen by both upstream APIs.

    `kzt`, `skz` and `vnl` tell whether the map's main course has a record
    filter (a leaderboard) for that mode at 128 tick.
    """

    id: int
    name: str
    tier: Tier
    is_global: bool
    kzt: bool
    skz: bool
    vnl: bool
    filesize: int
    created_on: datetime
    updated_on: datetime
    courses: tuple[Course, ...] = ()
    mappers: tuple[Mapper, ...] = ()
    approver_steam_id: SteamId | None = None
    workshop_link: str | None = None

    @property
    def kzgo_link(self) -> str:
        return KZGO_MAP_URL.format(name=self.name)

    @property
    def thumbnail(self) -> str:
        return MAP_THUMBNAIL_URL.format(name=self.name)

    @property
    def approver_steam_link(self) -> str | None:
        if self.approver_steam_id is None:
            return None
        return self.approver_steam_id.profile_url

    def mapper_steam_links(self) -> Iterator[str]:
        for mapper in self.mappers:
            yield mapper.steam_id.profile_url

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tier": int(self.tier),
            "global": self.is_global,
            "courses": [course.to_dict() for course in self.courses],
            "kzt": self.kzt,
            "skz": self.skz,
            "vnl": self.vnl,
            "mappers": [mapper.to_dict() for mapper in self.mappers],
            "approver_steam_id": str(self.approver_steam_id) if self.approver_steam_id else None,
            "filesize": self.filesize,
            "created_on": serialize_timestamp(self.created_on),
            "updated_on": serialize_timestamp(self.updated_on),
            "workshop_link": self.workshop_link,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> GlobalMap:
        approver = payload.get("approver_steam_id")
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            tier=Tier(int(payload["tier"])),
            is_global=bool(payload["global"]),
            courses=tuple(Course.from_dict(c) for c in payload.get("courses") or []),
            kzt=bool(payload["kzt"]),
            skz=bool(payload["skz"]),
            vnl=bool(payload["vnl"]),
            mappers=tuple(Mapper.from_dict(m) for m in payload.get("mappers") or []),
            approver_steam_id=SteamId.parse(approver) if approver else None,
            filesize=int(payload["filesize"]),
            created_on=deserialize_timestamp(payload["created_on"]),
            updated_on=deserialize_timestamp(payload["updated_on"]),
            workshop_link=payload.get("workshop_link") or None,
        )
