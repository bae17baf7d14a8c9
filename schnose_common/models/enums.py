from __future__ import annotations

from enum import IntEnum


class Mode(IntEnum):
    """KZ game modes, valued by their GlobalAPI mode id."""

    KZ_TIMER = 200
    SIMPLE_KZ = 201
    VANILLA = 202

    @property
    def short(self) -> str:
        return _MODE_SHORT_NAMES[self]


_MODE_SHORT_NAMES = {
    Mode.KZ_TIMER: "KZT",
    Mode.SIMPLE_KZ: "SKZ",
    Mode.VANILLA: "VNL",
}


class Tier(IntEnum):
    VERY_EASY = 1
    EASY = 2
    MEDIUM = 3
    HARD = 4
    VERY_HARD = 5
    EXTREME = 6
    DEATH = 7
