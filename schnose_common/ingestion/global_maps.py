from __future__ import annotations

import logging

from schnose_common.errors import UpstreamApiError
from schnose_common.integrations.global_api.client import (
    GlobalApiClient,
    GlobalApiMap,
    HttpGlobalApiClient,
    RecordFilter,
)
from schnose_common.integrations.schnose_api.client import HttpSchnoseApiClient, SchnoseApiClient, SchnoseMap
from schnose_common.models.enums import Mode
from schnose_common.models.global_map import GlobalMap

logger = logging.getLogger(__name__)

FILTER_STAGE = 0
FILTER_TICKRATE = 128
FILTER_LIMIT = 99999


def _filter_modes_by_map(filters: list[RecordFilter]) -> dict[int, set[Mode]]:
    out: dict[int, set[Mode]] = {}
    for record_filter in filters:
        mode = record_filter.mode
        if mode is None:
            continue
        out.setdefault(record_filter.map_id, set()).add(mode)
    return out


def _workshop_links_by_map(global_api_maps: list[GlobalApiMap]) -> dict[int, str]:
    out: dict[int, str] = {}
    for api_map in global_api_maps:
        if api_map.workshop_url and api_map.id not in out:
            out[api_map.id] = api_map.workshop_url
    return out


def build_global_map(
    fetched: SchnoseMap,
    *,
    modes: set[Mode],
    workshop_link: str | None,
) -> GlobalMap:
    if not fetched.courses:
        raise UpstreamApiError(f"SchnoseAPI returned map {fetched.name!r} (id {fetched.id}) without courses.")

    return GlobalMap(
        id=fetched.id,
        name=fetched.name,
        tier=fetched.courses[0].tier,
        is_global=fetched.is_global,
        courses=fetched.courses,
        kzt=Mode.KZ_TIMER in modes,
        skz=Mode.SIMPLE_KZ in modes,
        vnl=Mode.VANILLA in modes,
        mappers=fetched.mappers,
        approver_steam_id=fetched.approved_by,
        filesize=fetched.filesize,
        created_on=fetched.created_on,
        updated_on=fetched.updated_on,
        workshop_link=workshop_link,
    )


def fetch_global_maps(
    validated_only: bool,
    *,
    global_api: GlobalApiClient | None = None,
    schnose_api: SchnoseApiClient | None = None,
) -> list[GlobalMap]:
    """
    Fetch every KZ map and merge what both upstream APIs know about it.

    Requests run sequentially: record filters (stage 0, 128 tick), the
    SchnoseAPI map listing, then the GlobalAPI map listing. Any upstream failure
    raises `UpstreamApiError` and nothing is returned.

    The result holds one `GlobalMap` per map id, sorted by name.
    """

    owned: list[HttpGlobalApiClient | HttpSchnoseApiClient] = []
    if global_api is None:
        global_api = HttpGlobalApiClient()
        owned.append(global_api)
    if schnose_api is None:
        schnose_api = HttpSchnoseApiClient()
        owned.append(schnose_api)

    try:
        filters = global_api.get_record_filters(stages=FILTER_STAGE, tickrates=FILTER_TICKRATE, limit=FILTER_LIMIT)
        fetched_maps = schnose_api.get_maps(global_only=validated_only)
        global_api_maps = global_api.get_maps(validated_only=validated_only)
    finally:
        for client in owned:
            client.close()

    modes_by_map = _filter_modes_by_map(filters)
    workshop_links = _workshop_links_by_map(global_api_maps)

    maps: list[GlobalMap] = []
    seen: set[int] = set()
    for fetched in fetched_maps:
        if fetched.id in seen:
            logger.debug("Skipping duplicate map id %s (%s)", fetched.id, fetched.name)
            continue
        seen.add(fetched.id)
        maps.append(
            build_global_map(
                fetched,
                modes=modes_by_map.get(fetched.id, set()),
                workshop_link=workshop_links.get(fetched.id),
            )
        )

    maps.sort(key=lambda m: m.name)
    logger.info(
        "Fetched %d maps (validated_only=%s, record_filters=%d, global_api_maps=%d)",
        len(maps),
        validated_only,
        len(filters),
        len(global_api_maps),
    )
    return maps
