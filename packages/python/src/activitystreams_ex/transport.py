"""
Transport payload codec for Documents.

A transport sees a Document only as opaque bytes. Two encodings are
offered: compact UTF-8 JSON (the default) and CBOR (RFC 8949), which is
smaller on constrained links. The CBOR form replaces the ``@vocab``
namespace with a compact integer from a context registry.

CBOR requires the ``cbor2`` package::

    pip install activitystreams-ex[cbor]
"""

from __future__ import annotations

from typing import Any, Optional

try:
    import cbor2

    _HAS_CBOR2 = True
except ImportError:
    _HAS_CBOR2 = False

from activitystreams_ex.context import NAMESPACE, VOCAB_KEY
from activitystreams_ex.document import CONTEXT_KEY, Document
from activitystreams_ex.errors import ParseError
from activitystreams_ex.object import Object
from activitystreams_ex.security import resolve_limits

SUPPORTED_FORMATS = ("json", "cbor")

# Maps well-known vocabulary namespaces to compact integer IDs.
# Callers can pass their own registry.
DEFAULT_CONTEXT_REGISTRY: dict[str, int] = {
    NAMESPACE: 2,
    "http://www.w3.org/ns/activitystreams": 2,
    "https://w3id.org/security/v1": 3,
}


def _require_cbor2() -> None:
    if not _HAS_CBOR2:
        raise ImportError(
            "cbor2 is required for CBOR payloads. "
            "Install it with: pip install activitystreams-ex[cbor]"
        )


def _check_format(fmt: str) -> None:
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported payload format: {fmt}")


def encode_payload(
    document: Document[Any],
    fmt: str = "json",
    context_registry: Optional[dict[str, int]] = None,
) -> bytes:
    """Encode *document* as opaque transport bytes.

    Raises:
        ValueError: If *fmt* is not supported.
        ImportError: If *fmt* is ``"cbor"`` and ``cbor2`` is missing.
    """
    _check_format(fmt)
    if fmt == "json":
        return document.to_bytes()
    _require_cbor2()
    registry = context_registry or DEFAULT_CONTEXT_REGISTRY
    doc = document.to_dict()
    doc[CONTEXT_KEY] = _compress_context(doc[CONTEXT_KEY], registry)
    return cbor2.dumps(doc)


def decode_payload(
    data: bytes,
    payload_type: Any = Object,
    fmt: str = "json",
    context_registry: Optional[dict[str, int]] = None,
    *,
    limits: Optional[dict[str, int]] = None,
    **options: Any,
) -> Document[Any]:
    """Decode transport bytes back into a :class:`Document`.

    Raises:
        ParseError: If the bytes do not decode to a valid document.
        ValueError: If *fmt* is not supported.
        ImportError: If *fmt* is ``"cbor"`` and ``cbor2`` is missing.
    """
    _check_format(fmt)
    if fmt == "json":
        return Document.parse(data, payload_type, limits=limits, **options)
    _require_cbor2()
    resolved = resolve_limits(limits)
    if len(data) > resolved["max_document_size"]:
        raise ParseError(
            f"Document size {len(data)} exceeds limit {resolved['max_document_size']}"
        )
    try:
        decoded = cbor2.loads(data)
    except (cbor2.CBORDecodeError, RecursionError) as exc:
        raise ParseError(f"Document is not valid CBOR: {exc}") from exc
    if isinstance(decoded, dict) and CONTEXT_KEY in decoded:
        reverse = _reverse_registry(context_registry or DEFAULT_CONTEXT_REGISTRY)
        decoded[CONTEXT_KEY] = _decompress_context(decoded[CONTEXT_KEY], reverse)
    return Document.parse_dict(decoded, payload_type, limits=resolved, **options)


# ═══════════════════════════════════════════════════════════════════
# INTERNAL HELPERS
# ═══════════════════════════════════════════════════════════════════


def _reverse_registry(registry: dict[str, int]) -> dict[int, str]:
    """First namespace registered for each ID wins (https before http)."""
    reverse: dict[int, str] = {}
    for url, ident in registry.items():
        reverse.setdefault(ident, url)
    return reverse


def _compress_context(ctx: dict[str, Any], registry: dict[str, int]) -> dict[str, Any]:
    vocab = ctx.get(VOCAB_KEY)
    if vocab in registry:
        return {**ctx, VOCAB_KEY: registry[vocab]}
    return ctx


def _decompress_context(ctx: Any, reverse: dict[int, str]) -> Any:
    if isinstance(ctx, dict) and isinstance(ctx.get(VOCAB_KEY), int):
        return {**ctx, VOCAB_KEY: reverse.get(ctx[VOCAB_KEY], ctx[VOCAB_KEY])}
    return ctx
