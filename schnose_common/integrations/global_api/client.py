"""
GlobalAPI client.

Covers the two GlobalAPI endpoints the map aggregator needs: record filters
(which leaderboards exist for which map/mode/stage/tickrate) and the map
listing (used for workshop links).

Automated tests for this module should never call the live GlobalAPI. Inject a
fake `requests.Session` or a fake `GlobalApiClient` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from schnose_common.errors import UpstreamApiError
from schnose_common.integrations._http import expect_object_list, request_json
from schnose_common.models.enums import Mode
from schnose_common.utils.env import GLOBAL_API_BASE_URL_ENV, resolve_base_url, resolve_timeout_seconds

logger = logging.getLogger(__name__)

GLOBAL_API_BASE_URL = "https://kztimerglobal.com/api/v2"
GLOBAL_API_SERVICE = "GlobalAPI"

MAPS_LIMIT = 9999


@dataclass(frozen=True)
class RecordFilter:
    id: int
    map_id: int
    stage: int
    mode_id: int
    tickrate: int
    has_teleports: bool

    @property
    def mode(self) -> Mode | None:
        try:
            return Mode(self.mode_id)
        except ValueError:
            return None


@dataclass(frozen=True)
class GlobalApiMap:
    id: int
    name: str
    validated: bool
    difficulty: int
    filesize: int
    workshop_url: str = ""


class GlobalApiClient(Protocol):
    """Port used by the map aggregator to read from the GlobalAPI."""

    def get_record_filters(
        self,
        *,
        stages: int | None = None,
        tickrates: int | None = None,
        limit: int | None = None,
    ) -> list[RecordFilter]: ...

    def get_maps(self, *, validated_only: bool) -> list[GlobalApiMap]: ...


def parse_record_filter(payload: Mapping[str, Any]) -> RecordFilter:
    try:
        return RecordFilter(
            id=int(payload["id"]),
            map_id=int(payload["map_id"]),
            stage=int(payload["stage"]),
            mode_id=int(payload["mode_id"]),
            tickrate=int(payload["tickrate"]),
            has_teleports=bool(payload.get("has_teleports")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamApiError(f"GlobalAPI returned a malformed record filter: {exc}", error=exc) from exc


def parse_global_api_map(payload: Mapping[str, Any]) -> GlobalApiMap:
    try:
        return GlobalApiMap(
            id=int(payload["id"]),
            name=str(payload["name"]),
            validated=bool(payload.get("validated")),
            difficulty=int(payload.get("difficulty") or 0),
            filesize=int(payload.get("filesize") or 0),
            workshop_url=str(payload.get("workshop_url") or "").strip(),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamApiError(f"GlobalAPI returned a malformed map: {exc}", error=exc) from exc


class HttpGlobalApiClient(GlobalApiClient):
    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = resolve_base_url(base_url, GLOBAL_API_BASE_URL_ENV, GLOBAL_API_BASE_URL)
        self._timeout_seconds = resolve_timeout_seconds(timeout_seconds)
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""

        if self._owns_session:
            self._session.close()

    def _get(self, path: str, params: Mapping[str, Any]) -> Any:
        return request_json(
            self._session,
            f"{self._base_url}/{path.lstrip('/')}",
            service=GLOBAL_API_SERVICE,
            params=params,
            timeout_seconds=self._timeout_seconds,
        )

    def get_record_filters(
        self,
        *,
        stages: int | None = None,
        tickrates: int | None = None,
        limit: int | None = None,
    ) -> list[RecordFilter]:
        params: dict[str, Any] = {}
        if stages is not None:
            params["stages"] = stages
        if tickrates is not None:
            params["tickrates"] = tickrates
        if limit is not None:
            params["limit"] = limit

        payload = self._get("record_filters", params)
        items = expect_object_list(payload, service=GLOBAL_API_SERVICE, what="record filters")
        filters = [parse_record_filter(item) for item in items]
        logger.debug("GlobalAPI returned %d record filters", len(filters))
        return filters

    def get_maps(self, *, validated_only: bool) -> list[GlobalApiMap]:
        params: dict[str, Any] = {"limit": MAPS_LIMIT}
        if validated_only:
            params["is_validated"] = "true"

        payload = self._get("maps", params)
        items = expect_object_list(payload, service=GLOBAL_API_SERVICE, what="maps")
        maps = [parse_global_api_map(item) for item in items]
        logger.debug("GlobalAPI returned %d maps (validated_only=%s)", len(maps), validated_only)
        return maps
