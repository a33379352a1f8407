"""Fluent builders for every vocabulary entity.

A builder starts with every field at its default (absent, empty, or the
canonical type literal for Link and Preview), is filled in step by step,
and is finalized with ``build()`` into an immutable entity. Setters mutate
the builder and return it, so calls chain::

    activity = (
        ActivityBuilder()
        .with_base(lambda b: b.object_type("Activity").summary("Sally did something"))
        .with_actor(lambda a: a.with_base(lambda b: b.object_type("Person").name("Sally")))
        .with_object(lambda b: b.object_type("Note").name("A Note"))
        .build()
    )

Setters taking a nested entity also accept that entity's builder, which is
built on install. ``with_<field>(fn)`` runs *fn* over a fresh child builder
and installs the built result; *fn* may return the builder or ``None``.

Only two fields are required: ``Link.href`` and the ``partOf`` of the page
types. ``build()`` raises :class:`BuildError` when one is missing,
including from a nested build.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from activitystreams_ex.activity import Activity, IntransitiveActivity
from activitystreams_ex.actor import Actor, PublicKeyInfo
from activitystreams_ex.collection import (
    Collection,
    CollectionPage,
    OrderedCollection,
    OrderedCollectionPage,
)
from activitystreams_ex.context import NAMESPACE, Context
from activitystreams_ex.errors import BuildError
from activitystreams_ex.object import LINK_TYPE, PREVIEW_TYPE, Link, Object, Preview

logger = logging.getLogger(__name__)


class _Builder(ABC):
    @abstractmethod
    def build(self) -> Any:
        """Finalize into an immutable entity."""


def _built(value: Any) -> Any:
    """Build *value* if it is a builder, else return it unchanged."""
    if isinstance(value, _Builder):
        return value.build()
    return value


def _run(build_fn: Callable[[Any], Any], builder_type: type) -> Any:
    builder = builder_type()
    result = build_fn(builder)
    return (builder if result is None else result).build()


# ── Context ─────────────────────────────────────────────────────────


class ContextBuilder(_Builder):
    def __init__(self) -> None:
        self._namespace = NAMESPACE
        self._language: Optional[str] = None

    def namespace(self, value: str) -> ContextBuilder:
        self._namespace = value
        return self

    def language(self, value: Optional[str]) -> ContextBuilder:
        self._language = value
        return self

    def build(self) -> Context:
        return Context(namespace=self._namespace, language=self._language)


# ── Object ──────────────────────────────────────────────────────────


class ObjectBuilder(_Builder):
    def __init__(self) -> None:
        self._object_type: Optional[str] = None
        self._id: Optional[str] = None
        self._name: Optional[str] = None
        self._url: Optional[str] = None
        self._published: Optional[datetime] = None
        self._image: Optional[Link] = None
        self._attributed_to: list[Any] = []
        self._audience: Optional[Object] = None
        self._content: Optional[str] = None
        self._summary: Optional[str] = None
        self._duration: Optional[str] = None
        self._preview: Optional[Preview] = None

    @classmethod
    def of_object_type(cls, object_type: str) -> ObjectBuilder:
        return cls().object_type(object_type)

    @classmethod
    def note(cls, name: str, content: str) -> ObjectBuilder:
        return cls.of_object_type("Note").name(name).content(content)

    def object_type(self, value: Optional[str]) -> ObjectBuilder:
        self._object_type = value
        return self

    def id(self, value: Optional[str]) -> ObjectBuilder:
        self._id = value
        return self

    def name(self, value: Optional[str]) -> ObjectBuilder:
        self._name = value
        return self

    def url(self, value: Optional[str]) -> ObjectBuilder:
        self._url = value
        return self

    def published(self, value: Optional[datetime]) -> ObjectBuilder:
        self._published = value
        return self

    def image(self, value: Link | LinkBuilder | None) -> ObjectBuilder:
        self._image = _built(value)
        return self

    def with_image(self, build_fn: Callable[[LinkBuilder], Any]) -> ObjectBuilder:
        self._image = _run(build_fn, LinkBuilder)
        return self

    def attributed_to(self, values: Iterable[Any]) -> ObjectBuilder:
        """Replace the attribution list (Objects, Links or their builders)."""
        self._attributed_to = [_built(v) for v in values]
        return self

    def add_attributed_to(self, value: Any) -> ObjectBuilder:
        self._attributed_to.append(_built(value))
        return self

    def audience(self, value: Object | ObjectBuilder | None) -> ObjectBuilder:
        self._audience = _built(value)
        return self

    def with_audience(self, build_fn: Callable[[ObjectBuilder], Any]) -> ObjectBuilder:
        self._audience = _run(build_fn, ObjectBuilder)
        return self

    def content(self, value: Optional[str]) -> ObjectBuilder:
        self._content = value
        return self

    def summary(self, value: Optional[str]) -> ObjectBuilder:
        self._summary = value
        return self

    def duration(self, value: Optional[str]) -> ObjectBuilder:
        self._duration = value
        return self

    def preview(self, value: Preview | PreviewBuilder | None) -> ObjectBuilder:
        self._preview = _built(value)
        return self

    def with_preview(self, build_fn: Callable[[PreviewBuilder], Any]) -> ObjectBuilder:
        self._preview = _run(build_fn, PreviewBuilder)
        return self

    def build(self) -> Object:
        return Object(
            object_type=self._object_type,
            id=self._id,
            name=self._name,
            url=self._url,
            published=self._published,
            image=self._image,
            attributed_to=tuple(self._attributed_to),
            audience=self._audience,
            content=self._content,
            summary=self._summary,
            duration=self._duration,
            preview=self._preview,
        )


# ── Link / Preview ──────────────────────────────────────────────────


class LinkBuilder(_Builder):
    def __init__(self) -> None:
        self._href: Optional[str] = None
        self._link_type: Optional[str] = LINK_TYPE
        self._rel: list[str] = []
        self._media_type: Optional[str] = None
        self._name: Optional[str] = None
        self._hreflang: Optional[str] = None
        self._height: Optional[int] = None
        self._width: Optional[int] = None
        self._preview: Optional[Preview] = None

    def href(self, value: str) -> LinkBuilder:
        self._href = value
        return self

    def link_type(self, value: Optional[str]) -> LinkBuilder:
        self._link_type = value
        return self

    def rel(self, values: Iterable[str]) -> LinkBuilder:
        self._rel = list(values)
        return self

    def add_rel(self, value: str) -> LinkBuilder:
        self._rel.append(value)
        return self

    def media_type(self, value: Optional[str]) -> LinkBuilder:
        self._media_type = value
        return self

    def name(self, value: Optional[str]) -> LinkBuilder:
        self._name = value
        return self

    def hreflang(self, value: Optional[str]) -> LinkBuilder:
        self._hreflang = value
        return self

    def height(self, value: Optional[int]) -> LinkBuilder:
        self._height = value
        return self

    def width(self, value: Optional[int]) -> LinkBuilder:
        self._width = value
        return self

    def preview(self, value: Preview | PreviewBuilder | None) -> LinkBuilder:
        self._preview = _built(value)
        return self

    def with_preview(self, build_fn: Callable[[PreviewBuilder], Any]) -> LinkBuilder:
        self._preview = _run(build_fn, PreviewBuilder)
        return self

    def build(self) -> Link:
        if self._href is None:
            raise BuildError("Link", "href")
        return Link(
            href=self._href,
            link_type=self._link_type,
            rel=tuple(self._rel),
            media_type=self._media_type,
            name=self._name,
            hreflang=self._hreflang,
            height=self._height,
            width=self._width,
            preview=self._preview,
        )


class PreviewBuilder(_Builder):
    def __init__(self) -> None:
        self._object_type: Optional[str] = PREVIEW_TYPE
        self._name: Optional[str] = None
        self._duration: Optional[str] = None
        self._url: Optional[Link] = None

    def object_type(self, value: Optional[str]) -> PreviewBuilder:
        self._object_type = value
        return self

    def name(self, value: Optional[str]) -> PreviewBuilder:
        self._name = value
        return self

    def duration(self, value: Optional[str]) -> PreviewBuilder:
        self._duration = value
        return self

    def url(self, value: Link | LinkBuilder | None) -> PreviewBuilder:
        self._url = _built(value)
        return self

    def with_url(self, build_fn: Callable[[LinkBuilder], Any]) -> PreviewBuilder:
        self._url = _run(build_fn, LinkBuilder)
        return self

    def build(self) -> Preview:
        return Preview(
            object_type=self._object_type,
            name=self._name,
            duration=self._duration,
            url=self._url,
        )


# ── Actor ───────────────────────────────────────────────────────────


class ActorBuilder(_Builder):
    def __init__(self) -> None:
        self._base = Object()
        self._preferred_username: Optional[str] = None
        self._inbox: Optional[str] = None
        self._outbox: Optional[str] = None
        self._followers: Optional[str] = None
        self._following: Optional[str] = None
        self._liked: Optional[str] = None
        self._public_key_info: Optional[PublicKeyInfo] = None

    @classmethod
    def of_actor_type(cls, actor_type: str) -> ActorBuilder:
        """Start an actor of *actor_type* (see :data:`ACTOR_TYPES`)."""
        return cls().base(Object(object_type=actor_type))

    def base(self, value: Object | ObjectBuilder) -> ActorBuilder:
        self._base = _built(value)
        return self

    def with_base(self, build_fn: Callable[[ObjectBuilder], Any]) -> ActorBuilder:
        self._base = _run(build_fn, ObjectBuilder)
        return self

    def preferred_username(self, value: Optional[str]) -> ActorBuilder:
        self._preferred_username = value
        return self

    def inbox(self, value: Optional[str]) -> ActorBuilder:
        self._inbox = value
        return self

    def outbox(self, value: Optional[str]) -> ActorBuilder:
        self._outbox = value
        return self

    def followers(self, value: Optional[str]) -> ActorBuilder:
        self._followers = value
        return self

    def following(self, value: Optional[str]) -> ActorBuilder:
        self._following = value
        return self

    def liked(self, value: Optional[str]) -> ActorBuilder:
        self._liked = value
        return self

    def public_key_info(self, value: Optional[PublicKeyInfo]) -> ActorBuilder:
        self._public_key_info = value
        return self

    def public_key(self, key_id: str, owner: str, public_key_pem: str) -> ActorBuilder:
        self._public_key_info = PublicKeyInfo(key_id, owner, public_key_pem)
        return self

    def build(self) -> Actor:
        return Actor(
            base=self._base,
            preferred_username=self._preferred_username,
            inbox=self._inbox,
            outbox=self._outbox,
            followers=self._followers,
            following=self._following,
            liked=self._liked,
            public_key_info=self._public_key_info,
        )


# ── Activity ────────────────────────────────────────────────────────


class ActivityBuilder(_Builder):
    def __init__(self) -> None:
        self._base = Object()
        self._actor: Actor | Link | None = None
        self._object: Optional[Object] = None
        self._target: Optional[Object] = None
        self._result: Optional[str] = None
        self._to: Optional[list[str]] = None
        self._origin: Optional[str] = None
        self._instrument: Optional[str] = None

    @classmethod
    def of_type(cls, activity_type: str, summary: Optional[str] = None) -> ActivityBuilder:
        return cls().base(Object(object_type=activity_type, summary=summary))

    def base(self, value: Object | ObjectBuilder) -> ActivityBuilder:
        self._base = _built(value)
        return self

    def with_base(self, build_fn: Callable[[ObjectBuilder], Any]) -> ActivityBuilder:
        self._base = _run(build_fn, ObjectBuilder)
        return self

    def actor(self, value: Actor | Link | ActorBuilder | LinkBuilder | None) -> ActivityBuilder:
        self._actor = _built(value)
        return self

    def with_actor(self, build_fn: Callable[[ActorBuilder], Any]) -> ActivityBuilder:
        self._actor = _run(build_fn, ActorBuilder)
        return self

    def object(self, value: Object | ObjectBuilder | None) -> ActivityBuilder:
        self._object = _built(value)
        return self

    def with_object(self, build_fn: Callable[[ObjectBuilder], Any]) -> ActivityBuilder:
        self._object = _run(build_fn, ObjectBuilder)
        return self

    def target(self, value: Object | ObjectBuilder | None) -> ActivityBuilder:
        self._target = _built(value)
        return self

    def with_target(self, build_fn: Callable[[ObjectBuilder], Any]) -> ActivityBuilder:
        self._target = _run(build_fn, ObjectBuilder)
        return self

    def result(self, value: Optional[str]) -> ActivityBuilder:
        self._result = value
        return self

    def to(self, values: Optional[Iterable[str]]) -> ActivityBuilder:
        self._to = None if values is None else list(values)
        return self

    def add_to(self, value: str) -> ActivityBuilder:
        if self._to is None:
            self._to = []
        self._to.append(value)
        return self

    def origin(self, value: Optional[str]) -> ActivityBuilder:
        self._origin = value
        return self

    def instrument(self, value: Optional[str]) -> ActivityBuilder:
        self._instrument = value
        return self

    def build(self) -> Activity:
        return Activity(
            base=self._base,
            actor=self._actor,
            object=self._object,
            target=self._target,
            result=self._result,
            to=None if self._to is None else tuple(self._to),
            origin=self._origin,
            instrument=self._instrument,
        )


class IntransitiveActivityBuilder(_Builder):
    def __init__(self) -> None:
        self._base = Activity()

    @classmethod
    def of_type(cls, activity_type: str) -> IntransitiveActivityBuilder:
        return cls().base(Activity(base=Object(object_type=activity_type)))

    def base(self, value: Activity | ActivityBuilder) -> IntransitiveActivityBuilder:
        self._base = _built(value)
        return self

    def with_base(self, build_fn: Callable[[ActivityBuilder], Any]) -> IntransitiveActivityBuilder:
        self._base = _run(build_fn, ActivityBuilder)
        return self

    def build(self) -> IntransitiveActivity:
        if self._base.object is not None:
            logger.warning(
                "IntransitiveActivity %r built with an object; intransitive "
                "activities should not carry one",
                self._base.base.object_type,
            )
        return IntransitiveActivity(base=self._base)


# ── Collections ─────────────────────────────────────────────────────


class CollectionBuilder(_Builder):
    """Builds a :class:`Collection`; ``totalItems`` follows the item count."""

    def __init__(self) -> None:
        self._base = Object()
        self._items: list[Any] = []

    def base(self, value: Object | ObjectBuilder) -> CollectionBuilder:
        self._base = _built(value)
        return self

    def with_base(self, build_fn: Callable[[ObjectBuilder], Any]) -> CollectionBuilder:
        self._base = _run(build_fn, ObjectBuilder)
        return self

    def items(self, values: Iterable[Any]) -> CollectionBuilder:
        self._items = [_built(v) for v in values]
        return self

    def add_item(self, value: Any) -> CollectionBuilder:
        self._items.append(_built(value))
        return self

    def _total(self) -> Optional[int]:
        return len(self._items) if self._items else None

    def build(self) -> Collection:
        return Collection(base=self._base, total_items=self._total(), items=tuple(self._items))


class OrderedCollectionBuilder(CollectionBuilder):
    """Builds an :class:`OrderedCollection`; items keep insertion order."""

    def build(self) -> OrderedCollection:
        return OrderedCollection(
            base=self._base,
            total_items=self._total(),
            ordered_items=tuple(self._items),
        )


class CollectionPageBuilder(_Builder):
    _collection_builder: type = CollectionBuilder
    _entity: type = CollectionPage

    def __init__(self) -> None:
        self._base = self._collection_builder().build()
        self._part_of: Optional[str] = None
        self._next: Optional[str] = None
        self._prev: Optional[str] = None

    def base(self, value: Any) -> CollectionPageBuilder:
        self._base = _built(value)
        return self

    def with_base(self, build_fn: Callable[[Any], Any]) -> CollectionPageBuilder:
        self._base = _run(build_fn, self._collection_builder)
        return self

    def part_of(self, value: str) -> CollectionPageBuilder:
        self._part_of = value
        return self

    def next(self, value: Optional[str]) -> CollectionPageBuilder:
        self._next = value
        return self

    def prev(self, value: Optional[str]) -> CollectionPageBuilder:
        self._prev = value
        return self

    def build(self) -> Any:
        if self._part_of is None:
            raise BuildError(self._entity.__name__, "part_of")
        return self._entity(
            part_of=self._part_of,
            base=self._base,
            next=self._next,
            prev=self._prev,
        )


class OrderedCollectionPageBuilder(CollectionPageBuilder):
    _collection_builder = OrderedCollectionBuilder
    _entity = OrderedCollectionPage
