#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys

from schnose_common.errors import UpstreamApiError
from schnose_common.ingestion.global_maps import fetch_global_maps
from schnose_common.models.global_map import GlobalMap
from schnose_common.search import find_by_id, fuzzy_match
from schnose_common.utils.env import load_env

logger = logging.getLogger("fetch_global_maps")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fetch_global_maps",
        description="Fetch KZ maps from the GlobalAPI and the SchnoseAPI and print the merged records.",
    )
    parser.add_argument("--all", action="store_true", help="Include non-validated maps.")
    lookup = parser.add_mutually_exclusive_group()
    lookup.add_argument("--search", default=None, help="Fuzzy search map names (case-insensitive).")
    lookup.add_argument("--id", type=int, default=None, help="Exact map id lookup.")
    parser.add_argument("--json", action="store_true", help="Print maps as JSON.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def format_map_line(global_map: GlobalMap) -> str:
    flags = (("KZT", global_map.kzt), ("SKZ", global_map.skz), ("VNL", global_map.vnl))
    modes = [label for label, enabled in flags if enabled]
    return f"{global_map.name} ({global_map.id}) T{int(global_map.tier)} {'/'.join(modes) or '-'}"


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    load_env()

    try:
        maps = fetch_global_maps(validated_only=not args.all)
    except UpstreamApiError as exc:
        logger.error("Fetching maps failed: %s", exc)
        return 1

    if args.id is not None:
        found = find_by_id(maps, args.id)
        maps = [found] if found else []
    elif args.search is not None:
        maps = fuzzy_match(args.search, maps)

    if not maps and (args.id is not None or args.search is not None):
        print("No matching maps.")
        return 2

    if args.json:
        print(json.dumps([m.to_dict() for m in maps], indent=2))
    else:
        for global_map in maps:
            print(format_map_line(global_map))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
