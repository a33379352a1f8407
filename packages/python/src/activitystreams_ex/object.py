"""Core vocabulary entities: Object, Link, Preview and Object-or-Link references.

The :class:`Object` is the primary base type of the Activity Streams
vocabulary. Every attribute is optional, including ``id`` and ``type``;
absent attributes are omitted from the wire form rather than written as
``null`` or ``""``.

A :class:`Link` is an indirect, qualified reference to a resource identified
by its ``href``. Many properties accept either an Object or a Link. Neither
shape carries a discriminator, so :func:`resolve_reference` tells them apart
structurally: a JSON object with an ``href`` key is a Link, any other JSON
object is an Object. Variants are tried in declaration order, Object first,
which makes ``{}`` an Object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence, Union

from activitystreams_ex._wire import (
    expect_object,
    join_path,
    opt_entity,
    opt_list,
    opt_str,
    opt_timestamp,
    opt_uint,
    put,
    put_seq,
    req_str,
    str_list,
    to_utc,
)
from activitystreams_ex.errors import KeyResolutionAmbiguity

logger = logging.getLogger(__name__)

LINK_TYPE = "Link"
PREVIEW_TYPE = "Preview"


class Composite:
    """Mixin for entities that embed a base entity in their ``base`` field.

    Fields of the base are readable on the derived entity itself
    (``activity.summary`` is ``activity.base.summary``). Own fields are
    found first, so a derived field shadows a base field of the same name.
    """

    base: Any

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)


# ── Object ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Object:
    """Base type for (almost) every vocabulary entity."""

    object_type: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None  # TODO: model as an IRI or Link once IRI checks exist
    published: Optional[datetime] = None
    image: Optional[Link] = None
    attributed_to: tuple[AttributedTo, ...] = ()
    audience: Optional[Object] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    duration: Optional[str] = None
    preview: Optional[Preview] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributed_to", tuple(self.attributed_to))
        if self.published is not None:
            object.__setattr__(self, "published", to_utc(self.published))

    @staticmethod
    def accepts(value: Any) -> bool:
        """True if *value* has the Object shape (a JSON object without ``href``)."""
        return isinstance(value, dict) and "href" not in value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        put(out, "type", self.object_type)
        put(out, "id", self.id)
        put(out, "name", self.name)
        put(out, "url", self.url)
        put(out, "published", self.published)
        put(out, "image", self.image)
        put_seq(out, "attributedTo", self.attributed_to)
        put(out, "audience", self.audience)
        put(out, "content", self.content)
        put(out, "summary", self.summary)
        put(out, "duration", self.duration)
        put(out, "preview", self.preview)
        return out

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> Object:
        data = expect_object(data, path)
        refs_path = join_path(path, "attributedTo")
        return cls(
            object_type=opt_str(data, "type", path),
            id=opt_str(data, "id", path),
            name=opt_str(data, "name", path),
            url=opt_str(data, "url", path),
            published=opt_timestamp(data, "published", path),
            image=opt_entity(data, "image", Link, path),
            attributed_to=tuple(
                resolve_reference(value, path=join_path(refs_path, i))
                for i, value in enumerate(opt_list(data, "attributedTo", path))
            ),
            audience=opt_entity(data, "audience", Object, path),
            content=opt_str(data, "content", path),
            summary=opt_str(data, "summary", path),
            duration=opt_str(data, "duration", path),
            preview=opt_entity(data, "preview", Preview, path),
        )


# ── Link ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Link:
    """Qualified reference to the resource at ``href``.

    Properties of a Link describe the reference, not the resource. ``href``
    is the only required field in the vocabulary model. ``rel`` and
    ``hreflang`` are carried as given (no RFC 5988 / BCP 47 checks).
    """

    href: str
    link_type: Optional[str] = LINK_TYPE
    rel: tuple[str, ...] = ()
    media_type: Optional[str] = None
    name: Optional[str] = None
    hreflang: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    preview: Optional[Preview] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rel", tuple(self.rel))

    @classmethod
    def for_href(cls, href: str, media_type: Optional[str] = None) -> Link:
        """Plain ``Link`` to *href*, optionally with its media type."""
        return cls(href=href, media_type=media_type)

    @staticmethod
    def accepts(value: Any) -> bool:
        """True if *value* has the Link shape (a JSON object with ``href``)."""
        return isinstance(value, dict) and "href" in value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        put(out, "type", self.link_type)
        out["href"] = self.href
        put_seq(out, "rel", self.rel)
        put(out, "mediaType", self.media_type)
        put(out, "name", self.name)
        put(out, "hreflang", self.hreflang)
        put(out, "height", self.height)
        put(out, "width", self.width)
        put(out, "preview", self.preview)
        return out

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> Link:
        data = expect_object(data, path)
        return cls(
            href=req_str(data, "href", path),
            link_type=opt_str(data, "type", path),
            rel=str_list(data, "rel", path),
            media_type=opt_str(data, "mediaType", path),
            name=opt_str(data, "name", path),
            hreflang=opt_str(data, "hreflang", path),
            height=opt_uint(data, "height", path),
            width=opt_uint(data, "width", path),
            preview=opt_entity(data, "preview", Preview, path),
        )


# ── Preview ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Preview:
    """Identifies an entity that provides a preview of an object."""

    object_type: Optional[str] = PREVIEW_TYPE
    name: Optional[str] = None
    duration: Optional[str] = None
    url: Optional[Link] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        put(out, "type", self.object_type)
        put(out, "name", self.name)
        put(out, "duration", self.duration)
        put(out, "url", self.url)
        return out

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> Preview:
        data = expect_object(data, path)
        return cls(
            object_type=opt_str(data, "type", path),
            name=opt_str(data, "name", path),
            duration=opt_str(data, "duration", path),
            url=opt_entity(data, "url", Link, path),
        )


# ── Polymorphic references ──────────────────────────────────────────

AttributedTo = Union[Object, Link]

REFERENCE_VARIANTS: tuple[type, ...] = (Object, Link)


def resolve_reference(
    value: Any,
    variants: Optional[Sequence[Any]] = None,
    path: Optional[str] = None,
) -> Any:
    """Parse an untagged Object-or-Link value.

    Args:
        value: Decoded JSON value.
        variants: Candidate entity classes in trial order. Each must
            provide ``accepts(value)`` and ``from_dict(value, path)``.
            Defaults to ``(Object, Link)``.
        path: Wire path used in error messages.

    Returns:
        An instance of the first variant whose shape accepts *value*.

    Raises:
        KeyResolutionAmbiguity: If no variant accepts *value*.
        ParseError: If the chosen variant rejects a field of *value*.
    """
    candidates = tuple(variants or REFERENCE_VARIANTS)
    for variant in candidates:
        if variant.accepts(value):
            logger.debug("Resolved %s as %s", path or "reference", variant.__name__)
            return variant.from_dict(value, path)
    raise KeyResolutionAmbiguity(value, candidates, path)
