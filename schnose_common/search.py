"""
Lookup helpers over a fetched `GlobalMap` collection.

Name lookups are fuzzy and case-insensitive; id lookups are exact.

Note: `fuzzy_match` returns matches in ascending score order (weakest match
first), and `fuzzy_search` returns the first of those. Callers that want the
best match should take the last element of `fuzzy_match`.
"""

from __future__ import annotations

from collections.abc import Sequence

from schnose_common.models.global_map import GlobalMap
from schnose_common.utils.fuzzy import fuzzy_score

MIN_SCORE = 50
EMPTY_QUERY_SCORE = 100


def score_maps(query: str, maps: Sequence[GlobalMap]) -> list[tuple[int, GlobalMap]]:
    """Return `(score, map)` pairs for every map scoring at least `MIN_SCORE`, ascending."""

    query = query.lower()
    scored: list[tuple[int, GlobalMap]] = []
    for global_map in maps:
        if not query:
            scored.append((EMPTY_QUERY_SCORE, global_map))
            continue
        score = fuzzy_score(global_map.name.lower(), query)
        if score is not None and score >= MIN_SCORE:
            scored.append((score, global_map))

    scored.sort(key=lambda pair: pair[0])
    return scored


def fuzzy_match(query: str, maps: Sequence[GlobalMap]) -> list[GlobalMap]:
    return [global_map for _, global_map in score_maps(query, maps)]


def find_by_id(maps: Sequence[GlobalMap], map_id: int) -> GlobalMap | None:
    return next((global_map for global_map in maps if global_map.id == map_id), None)


def fuzzy_search(maps: Sequence[GlobalMap], identifier: int | str) -> GlobalMap | None:
    """
    Find a map by id (exact) or by name (fuzzy).

    An `int` identifier is matched against map ids; anything else is treated as
    a name and goes through `fuzzy_match`.
    """

    if isinstance(identifier, int) and not isinstance(identifier, bool):
        return find_by_id(maps, identifier)

    matches = fuzzy_match(str(identifier), maps)
    return matches[0] if matches else None
