"""
Timestamp (de)serialization for upstream API payloads.

Both upstream APIs send naive timestamps such as `2021-03-14T18:02:55`.
Parsing is strict: unpadded fields, offsets and fractional seconds are
rejected so that every accepted string serializes back to itself.
"""

from __future__ import annotations

import re
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII)


def serialize_timestamp(value: datetime) -> str:
    # strftime does not zero-pad years below 1000 on every platform.
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def serialize_optional_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return serialize_timestamp(value)


def deserialize_timestamp(value: str) -> datetime:
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise ValueError(f"Expected a date with format `{TIMESTAMP_FORMAT}`, got {value!r}.")
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ValueError(f"Expected a date with format `{TIMESTAMP_FORMAT}`, got {value!r}.") from exc


def deserialize_optional_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    return deserialize_timestamp(value)
