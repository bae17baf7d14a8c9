"""
SchnoseAPI client.

The SchnoseAPI is the primary source of map metadata (courses, tiers, mappers,
approver, timestamps). Responses are wrapped as `{"result": ..., "took": ms}`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

import requests

from schnose_common.errors import UpstreamApiError
from schnose_common.integrations._http import expect_object_list, request_json
from schnose_common.models.enums import Tier
from schnose_common.models.global_map import Course, Mapper
from schnose_common.models.steam_id import SteamId
from schnose_common.utils.env import SCHNOSE_API_BASE_URL_ENV, resolve_base_url, resolve_timeout_seconds
from schnose_common.utils.serde import deserialize_timestamp

logger = logging.getLogger(__name__)

SCHNOSE_API_BASE_URL = "https://schnose.xyz/api"
SCHNOSE_API_SERVICE = "SchnoseAPI"

MAPS_LIMIT = 9999


@dataclass(frozen=True)
class SchnoseMap:
    id: int
    name: str
    is_global: bool
    filesize: int
    courses: tuple[Course, ...]
    mappers: tuple[Mapper, ...]
    approved_by: SteamId | None
    created_on: datetime
    updated_on: datetime


class SchnoseApiClient(Protocol):
    """Port used by the map aggregator to read from the SchnoseAPI."""

    def get_maps(self, *, global_only: bool) -> list[SchnoseMap]: ...


def _unwrap_result(payload: Any) -> Any:
    if not isinstance(payload, Mapping) or "result" not in payload:
        raise UpstreamApiError("SchnoseAPI returned unexpected JSON shape (missing `result`).")
    return payload["result"]


def parse_schnose_map(payload: Mapping[str, Any]) -> SchnoseMap:
    try:
        approved_by = payload.get("approved_by")
        return SchnoseMap(
            id=int(payload["id"]),
            name=str(payload["name"]),
            is_global=bool(payload["global"]),
            filesize=int(payload.get("filesize") or 0),
            courses=tuple(
                Course(id=int(c["id"]), stage=int(c["stage"]), tier=Tier(int(c["tier"])))
                for c in payload.get("courses") or []
            ),
            mappers=tuple(
                Mapper(name=str(m["name"]), steam_id=SteamId.parse(m["steam_id"]))
                for m in payload.get("mappers") or []
            ),
            approved_by=SteamId.parse(approved_by) if approved_by else None,
            created_on=deserialize_timestamp(payload["created_on"]),
            updated_on=deserialize_timestamp(payload["updated_on"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamApiError(f"SchnoseAPI returned a malformed map: {exc}", error=exc) from exc


class HttpSchnoseApiClient(SchnoseApiClient):
    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = resolve_base_url(base_url, SCHNOSE_API_BASE_URL_ENV, SCHNOSE_API_BASE_URL)
        self._timeout_seconds = resolve_timeout_seconds(timeout_seconds)
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""

        if self._owns_session:
            self._session.close()

    def get_maps(self, *, global_only: bool) -> list[SchnoseMap]:
        params: dict[str, Any] = {"limit": MAPS_LIMIT}
        if global_only:
            params["global"] = "true"

        payload = request_json(
            self._session,
            f"{self._base_url}/maps",
            service=SCHNOSE_API_SERVICE,
            params=params,
            timeout_seconds=self._timeout_seconds,
        )
        result = expect_object_list(_unwrap_result(payload), service=SCHNOSE_API_SERVICE, what="maps")
        maps = [parse_schnose_map(item) for item in result]
        logger.debug("SchnoseAPI returned %d maps (global_only=%s)", len(maps), global_only)
        return maps
