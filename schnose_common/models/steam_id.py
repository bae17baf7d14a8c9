from __future__ import annotations

import re
from dataclasses import dataclass

STEAM_ID64_BASE = 76561197960265728

_STEAM_ID_RE = re.compile(r"^STEAM_[0-5]:([01]):(\d+)$", re.ASCII)


@dataclass(frozen=True, order=True)
class SteamId:
    """
    A Steam account id.

    Stored as the account number (`Z`) and the auth bit (`Y`) from the
    `STEAM_X:Y:Z` form. Always renders with universe 1, the way the KZ APIs do.
    """

    account_number: int
    auth_bit: int = 0

    @classmethod
    def parse(cls, value: str | int) -> SteamId:
        if isinstance(value, int):
            return cls.from_id64(value)

        raw = str(value).strip()
        match = _STEAM_ID_RE.match(raw.upper())
        if match:
            return cls(account_number=int(match.group(2)), auth_bit=int(match.group(1)))
        if raw.isdigit():
            return cls.from_id64(int(raw))
        raise ValueError(f"Unable to parse SteamID from: {value!r}")

    @classmethod
    def from_id64(cls, id64: int) -> SteamId:
        offset = int(id64) - STEAM_ID64_BASE
        if offset < 0:
            raise ValueError(f"Not a 64-bit SteamID: {id64!r}")
        return cls(account_number=offset // 2, auth_bit=offset % 2)

    def as_id64(self) -> int:
        return STEAM_ID64_BASE + self.account_number * 2 + self.auth_bit

    @property
    def profile_url(self) -> str:
        return f"https://steamcommunity.com/profiles/{self.as_id64()}"

    def __str__(self) -> str:
        return f"STEAM_1:{self.auth_bit}:{self.account_number}"
