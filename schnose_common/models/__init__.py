"""
Domain models shared across the aggregator, the search helpers and callers.
"""

from schnose_common.models.enums import Mode, Tier
from schnose_common.models.global_map import Course, GlobalMap, Mapper
from schnose_common.models.steam_id import SteamId

__all__ = [
    "Course",
    "GlobalMap",
    "Mapper",
    "Mode",
    "SteamId",
    "Tier",
]
