"""Resource limits applied to untrusted wire payloads before parsing."""

from __future__ import annotations

import json
from typing import Any, Optional

from activitystreams_ex.errors import ParseError

DEFAULT_RESOURCE_LIMITS = {
    "max_document_size": 10 * 1024 * 1024,  # 10 MB
    "max_graph_depth": 100,
}

_MAX_RECURSION_DEPTH = 500  # Safety cap for _measure_depth


def resolve_limits(limits: Optional[dict[str, int]] = None) -> dict[str, int]:
    """Default limits overlaid with *limits*."""
    return {**DEFAULT_RESOURCE_LIMITS, **(limits or {})}


def load_json(
    raw: str | bytes | bytearray,
    limits: Optional[dict[str, int]] = None,
) -> Any:
    """Decode a JSON payload after checking its size and nesting depth.

    Raises:
        ParseError: If *raw* exceeds a limit or is not valid JSON.
        TypeError: If *raw* is not text or bytes.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise TypeError(f"Payload must be str or bytes, got: {type(raw).__name__}")
    resolved = resolve_limits(limits)
    if len(raw) > resolved["max_document_size"]:
        raise ParseError(
            f"Document size {len(raw)} exceeds limit {resolved['max_document_size']}"
        )
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ParseError(f"Document is not valid JSON: {exc}") from exc
    enforce_depth(parsed, resolved)
    return parsed


def enforce_depth(document: Any, limits: Optional[dict[str, int]] = None) -> None:
    """Reject decoded documents nested deeper than ``max_graph_depth``."""
    resolved = resolve_limits(limits)
    depth = _measure_depth(document)
    if depth > resolved["max_graph_depth"]:
        raise ParseError(
            f"Document depth {depth} exceeds limit {resolved['max_graph_depth']}"
        )


def _measure_depth(obj: Any, current: int = 0) -> int:
    if current > _MAX_RECURSION_DEPTH:
        return current  # Safety cap to prevent stack overflow
    if obj is None or not isinstance(obj, (dict, list)):
        return current
    max_depth = current
    items = obj if isinstance(obj, list) else obj.values()
    for item in items:
        max_depth = max(max_depth, _measure_depth(item, current + 1))
    return max_depth
