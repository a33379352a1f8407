"""Wire-level helpers shared by the entity codecs.

Every reader takes the flat JSON object, the wire key and the dotted path
of the enclosing value, and raises :class:`ParseError` on a wrong type.
Absent keys read as ``None`` (or an empty tuple for sequences).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from activitystreams_ex.errors import ParseError


def join_path(path: Optional[str], key: str | int) -> str:
    if isinstance(key, int):
        return f"{path or ''}[{key}]"
    return f"{path}.{key}" if path else key


def expect_object(value: Any, path: Optional[str] = None) -> dict[str, Any]:
    """Return *value* if it is a JSON object, else raise."""
    if not isinstance(value, dict):
        raise ParseError(
            f"must be an object, got: {type(value).__name__}", path,
        )
    return value


def without(data: dict[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Copy of *data* minus *keys* (used to hand a base entity its share)."""
    drop = frozenset(keys)
    return {k: v for k, v in data.items() if k not in drop}


def opt_str(data: dict[str, Any], key: str, path: Optional[str] = None) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(
            f"must be a string, got: {type(value).__name__}", join_path(path, key),
        )
    return value


def req_str(data: dict[str, Any], key: str, path: Optional[str] = None) -> str:
    if data.get(key) is None:
        raise ParseError("required field is missing", join_path(path, key))
    return opt_str(data, key, path)  # type: ignore[return-value]


def opt_uint(data: dict[str, Any], key: str, path: Optional[str] = None) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(
            f"must be an integer, got: {type(value).__name__}", join_path(path, key),
        )
    if value < 0:
        raise ParseError(f"must be non-negative, got: {value}", join_path(path, key))
    return value


def opt_str_list(
    data: dict[str, Any], key: str, path: Optional[str] = None,
) -> Optional[tuple[str, ...]]:
    value = data.get(key)
    if value is None:
        return None
    field_path = join_path(path, key)
    if not isinstance(value, list):
        raise ParseError(f"must be an array, got: {type(value).__name__}", field_path)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ParseError(
                f"must be a string, got: {type(item).__name__}",
                join_path(field_path, i),
            )
    return tuple(value)


def str_list(data: dict[str, Any], key: str, path: Optional[str] = None) -> tuple[str, ...]:
    return opt_str_list(data, key, path) or ()


def opt_list(data: dict[str, Any], key: str, path: Optional[str] = None) -> list[Any]:
    """Raw JSON array under *key*, or an empty list when absent."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(
            f"must be an array, got: {type(value).__name__}", join_path(path, key),
        )
    return value


# -- Timestamps ---------------------------------------------------------------

_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")


def to_utc(dt: datetime) -> datetime:
    """Normalize to an aware UTC datetime; naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """RFC 3339 in UTC with a literal ``Z`` suffix."""
    dt = to_utc(dt).replace(tzinfo=None)
    if dt.microsecond == 0:
        timespec = "seconds"
    elif dt.microsecond % 1000 == 0:
        timespec = "milliseconds"
    else:
        timespec = "microseconds"
    return dt.isoformat(timespec=timespec) + "Z"


def opt_timestamp(
    data: dict[str, Any], key: str, path: Optional[str] = None,
) -> Optional[datetime]:
    raw = opt_str(data, key, path)
    if raw is None:
        return None
    s = raw
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"
    # fromisoformat only takes 3 or 6 fraction digits before Python 3.11
    s = _FRACTION.sub(lambda m: "." + m.group(1).ljust(6, "0")[:6], s, count=1)
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as exc:
        raise ParseError(f"invalid timestamp {raw!r}", join_path(path, key)) from exc
    return to_utc(dt)


# -- Output -------------------------------------------------------------------


def put(out: dict[str, Any], key: str, value: Any) -> None:
    """Set *key* unless *value* is absent."""
    if value is None:
        return
    if isinstance(value, datetime):
        value = format_timestamp(value)
    elif isinstance(value, tuple):
        value = list(value)
    elif hasattr(value, "to_dict"):
        value = value.to_dict()
    out[key] = value


def put_seq(out: dict[str, Any], key: str, values: Iterable[Any]) -> None:
    """Set *key* to a JSON array unless *values* is empty."""
    items = [v.to_dict() if hasattr(v, "to_dict") else v for v in values]
    if items:
        out[key] = items


def opt_entity(
    data: dict[str, Any], key: str, entity_type: Any, path: Optional[str] = None,
) -> Any:
    """Parse the nested entity under *key* with ``entity_type.from_dict``."""
    value = data.get(key)
    if value is None:
        return None
    return entity_type.from_dict(value, join_path(path, key))
