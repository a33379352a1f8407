"""Document envelope: one ``@context`` plus one flattened payload entity.

This wrapper is not an Activity Streams type (the vocabulary has its own
``Document``); it exists only to pair the processing context with the
entity being written or read. On the wire the payload's keys sit next to
``@context`` in a single JSON object.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from activitystreams_ex._wire import expect_object, without
from activitystreams_ex.context import Context, normalize_context
from activitystreams_ex.errors import ParseError
from activitystreams_ex.object import Object
from activitystreams_ex.security import enforce_depth, load_json

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTEXT_KEY = "@context"


@dataclass(frozen=True)
class Document(Generic[T]):
    context: Context
    payload: T

    # ── Serialization ────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {CONTEXT_KEY: self.context.to_dict()}
        out.update(self.payload.to_dict())  # type: ignore[attr-defined]
        return out

    def serialize(self) -> str:
        """Compact JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def serialize_pretty(self) -> str:
        """JSON indented by two spaces."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    def to_bytes(self) -> bytes:
        """UTF-8 compact JSON, the opaque payload handed to a transport."""
        return self.serialize().encode("utf-8")

    # ── Parsing ──────────────────────────────────────────────────

    @classmethod
    def from_dict(
        cls,
        data: Any,
        payload_type: Any = Object,
        **options: Any,
    ) -> Document[Any]:
        """Build a Document from decoded JSON.

        Args:
            data: Decoded top-level JSON object.
            payload_type: Entity class whose ``from_dict`` reads the payload.
            **options: Passed through to ``payload_type.from_dict``
                (e.g. ``item_type`` for collections).

        Raises:
            ParseError: If *data* is not an object, has no ``@context``, or
                the payload does not fit *payload_type*.
        """
        data = expect_object(data)
        if CONTEXT_KEY not in data:
            raise ParseError("required field is missing", CONTEXT_KEY)
        context = normalize_context(data[CONTEXT_KEY])
        payload = payload_type.from_dict(without(data, (CONTEXT_KEY,)), None, **options)
        return cls(context=context, payload=payload)

    @classmethod
    def parse(
        cls,
        raw: str | bytes | bytearray,
        payload_type: Any = Object,
        *,
        limits: Optional[dict[str, int]] = None,
        **options: Any,
    ) -> Document[Any]:
        """Parse a JSON payload into a Document of *payload_type*.

        Args:
            raw: JSON text or UTF-8 bytes.
            payload_type: Entity class of the payload. Defaults to Object.
            limits: Overrides for
                :data:`~activitystreams_ex.security.DEFAULT_RESOURCE_LIMITS`.
            **options: Passed through to ``payload_type.from_dict``.

        Raises:
            ParseError: On malformed JSON, an exceeded resource limit, or a
                payload that does not fit *payload_type*.
        """
        logger.debug("Parsing %s document", getattr(payload_type, "__name__", payload_type))
        return cls.from_dict(load_json(raw, limits), payload_type, **options)

    @classmethod
    def parse_dict(
        cls,
        data: Any,
        payload_type: Any = Object,
        *,
        limits: Optional[dict[str, int]] = None,
        **options: Any,
    ) -> Document[Any]:
        """Like :meth:`parse` for an already decoded document."""
        enforce_depth(data, limits)
        return cls.from_dict(data, payload_type, **options)
