"""
SchnoseAPI integration clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schnose_common.integrations.schnose_api.client import (
        HttpSchnoseApiClient,
        SchnoseApiClient,
        SchnoseMap,
    )

__all__ = [
    "HttpSchnoseApiClient",
    "SchnoseApiClient",
    "SchnoseMap",
]


def __getattr__(name: str):
    if name in __all__:
        from schnose_common.integrations.schnose_api import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
