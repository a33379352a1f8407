"""
ActivityStreamsProcessor: JSON-LD processing of Activity Streams documents.

Wraps PyLD. A document's own ``@context`` only names the vocabulary, so
expansion adds the ``id``/``type`` keyword aliases that the normative
Activity Streams context defines; without them ``type`` would expand to a
vocabulary property instead of ``@type``. The normative context also maps
terms into the ``#`` fragment namespace (``as:name`` is
``https://www.w3.org/ns/activitystreams#name``), so the bare wire namespace
is given its ``#`` before processing.
"""

from __future__ import annotations
from typing import Any, Optional

from pyld import jsonld

from activitystreams_ex.context import NAMESPACE, VOCAB_KEY, Context
from activitystreams_ex.document import CONTEXT_KEY, Document
from activitystreams_ex.security import enforce_depth, resolve_limits

KEYWORD_ALIASES = {"id": "@id", "type": "@type"}

# Wire spellings of the Activity Streams namespace, without the fragment.
_AS_NAMESPACES = (NAMESPACE, "http://www.w3.org/ns/activitystreams")


def processing_context(context: Context) -> dict[str, Any]:
    """The JSON-LD context used to process documents under *context*."""
    ctx = context.to_dict()
    if context.namespace in _AS_NAMESPACES:
        ctx[VOCAB_KEY] = NAMESPACE + "#"
    return {**ctx, **KEYWORD_ALIASES}


class ActivityStreamsProcessor:
    """JSON-LD processor for :class:`Document` values."""

    def __init__(self, resource_limits: Optional[dict[str, int]] = None):
        self._limits = resolve_limits(resource_limits)

    def _prepare(self, document: Document[Any]) -> dict[str, Any]:
        doc = document.to_dict()
        enforce_depth(doc, self._limits)
        doc[CONTEXT_KEY] = processing_context(document.context)
        return doc

    # ── Core Operations ──────────────────────────────────────────

    def expand(self, document: Document[Any], **kwargs: Any) -> list[dict[str, Any]]:
        """Expand a document to absolute IRIs."""
        return jsonld.expand(self._prepare(document), kwargs)

    def compact(self, document: Document[Any], **kwargs: Any) -> dict[str, Any]:
        """Expand then re-compact a document against its processing context."""
        expanded = self.expand(document)
        return jsonld.compact(expanded, processing_context(document.context), kwargs)

    def to_rdf(self, document: Document[Any], **kwargs: Any) -> str:
        """Convert to N-Quads."""
        return jsonld.to_rdf(self._prepare(document), {**kwargs, "format": "application/n-quads"})
