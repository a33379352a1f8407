"""Processing-context header (``@context``) for Activity Streams documents.

JSON-LD uses the special ``@context`` property to define the processing
context. Producers should reference the normative Activity Streams context
``https://www.w3.org/ns/activitystreams``; on the wire this may be a string,
an object or an array. See https://www.w3.org/TR/activitystreams-core/#jsonld

Reading is lenient and writing is canonical:

- an object header keeps its ``@vocab`` and optional ``@language``;
- a bare string, whatever it says, collapses to the default context;
- an array (multi-context form) also collapses to the default context.

The default context is always written back in object form, so a document
that arrived with a string header changes shape on re-serialization. The
namespace is the same, only the shape differs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from activitystreams_ex._wire import join_path, opt_str
from activitystreams_ex.errors import ParseError

logger = logging.getLogger(__name__)

NAMESPACE = "https://www.w3.org/ns/activitystreams"

VOCAB_KEY = "@vocab"
LANGUAGE_KEY = "@language"


@dataclass(frozen=True)
class Context:
    """Normalized ``@context``: vocabulary namespace plus optional language."""

    namespace: str = NAMESPACE
    language: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {VOCAB_KEY: self.namespace}
        if self.language is not None:
            out[LANGUAGE_KEY] = self.language
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Optional[str] = None) -> Context:
        if data.get(VOCAB_KEY) is None:
            raise ParseError("required field is missing", join_path(path, VOCAB_KEY))
        return cls(
            namespace=opt_str(data, VOCAB_KEY, path),  # type: ignore[arg-type]
            language=opt_str(data, LANGUAGE_KEY, path),
        )

    @property
    def is_default(self) -> bool:
        return self.namespace == NAMESPACE and self.language is None


def normalize_context(raw: Any, path: Optional[str] = "@context") -> Context:
    """Turn a wire ``@context`` value into a :class:`Context`.

    Args:
        raw: The decoded JSON value found under ``@context``.
        path: Wire path used in error messages.

    Returns:
        The object form as given, or the default Context for a string or
        array header. A string's content is discarded, not validated.

    Raises:
        ParseError: If *raw* is an object missing ``@vocab`` or holding
            non-string values, or is a number, boolean or null.
    """
    if isinstance(raw, dict):
        return Context.from_dict(raw, path)
    if isinstance(raw, (str, list)):
        logger.debug("Collapsing %s @context to the default context", type(raw).__name__)
        return Context()
    raise ParseError(
        f"must be an object, string or array, got: {type(raw).__name__}", path,
    )
