"""Collections of objects or links, and pages of them.

A :class:`Collection` is a subtype of Object representing ordered or
unordered sets of items. :class:`OrderedCollection` is the strictly ordered
variant and writes its items under ``orderedItems``. The page types embed
their collection and point back to it with ``partOf``.

Items are generic. When parsing without an explicit ``item_type``, a
string item is kept as an IRI and an object item is resolved as an
Object-or-Link reference. Items are written with their ``to_dict()`` when
they have one, as-is otherwise.

An empty item sequence is omitted from the wire, and so is ``totalItems``
when the builder derived it from an empty sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from activitystreams_ex._wire import (
    expect_object,
    join_path,
    opt_list,
    opt_str,
    opt_uint,
    put,
    put_seq,
    req_str,
    without,
)
from activitystreams_ex.errors import ParseError
from activitystreams_ex.object import Composite, Object, resolve_reference

_COLLECTION_KEYS = ("totalItems", "items")
_ORDERED_KEYS = ("totalItems", "orderedItems")
_PAGE_KEYS = ("partOf", "next", "prev")


def _read_items(
    data: dict[str, Any], key: str, item_type: Any, path: Optional[str],
) -> tuple[Any, ...]:
    items_path = join_path(path, key)
    items = []
    for i, value in enumerate(opt_list(data, key, path)):
        item_path = join_path(items_path, i)
        if item_type is None:
            item = value if isinstance(value, str) else resolve_reference(value, path=item_path)
        elif item_type is str:
            if not isinstance(value, str):
                raise ParseError(f"must be a string, got: {type(value).__name__}", item_path)
            item = value
        else:
            item = item_type.from_dict(value, item_path)
        items.append(item)
    return tuple(items)


@dataclass(frozen=True)
class Collection(Composite):
    base: Object = field(default_factory=Object)
    total_items: Optional[int] = None
    items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        put(out, "totalItems", self.total_items)
        put_seq(out, "items", self.items)
        return out

    @classmethod
    def from_dict(
        cls, data: Any, path: Optional[str] = None, item_type: Any = None,
    ) -> Collection:
        data = expect_object(data, path)
        return cls(
            base=Object.from_dict(without(data, _COLLECTION_KEYS), path),
            total_items=opt_uint(data, "totalItems", path),
            items=_read_items(data, "items", item_type, path),
        )


@dataclass(frozen=True)
class OrderedCollection(Composite):
    base: Object = field(default_factory=Object)
    total_items: Optional[int] = None
    ordered_items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ordered_items", tuple(self.ordered_items))

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        put(out, "totalItems", self.total_items)
        put_seq(out, "orderedItems", self.ordered_items)
        return out

    @classmethod
    def from_dict(
        cls, data: Any, path: Optional[str] = None, item_type: Any = None,
    ) -> OrderedCollection:
        data = expect_object(data, path)
        return cls(
            base=Object.from_dict(without(data, _ORDERED_KEYS), path),
            total_items=opt_uint(data, "totalItems", path),
            ordered_items=_read_items(data, "orderedItems", item_type, path),
        )


@dataclass(frozen=True)
class CollectionPage(Composite):
    """A distinct subset of the items of a :class:`Collection`."""

    part_of: str
    base: Collection = field(default_factory=Collection)
    next: Optional[str] = None
    prev: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        out["partOf"] = self.part_of
        put(out, "next", self.next)
        put(out, "prev", self.prev)
        return out

    @classmethod
    def from_dict(
        cls, data: Any, path: Optional[str] = None, item_type: Any = None,
    ) -> CollectionPage:
        data = expect_object(data, path)
        return cls(
            base=Collection.from_dict(without(data, _PAGE_KEYS), path, item_type),
            part_of=req_str(data, "partOf", path),
            next=opt_str(data, "next", path),
            prev=opt_str(data, "prev", path),
        )


@dataclass(frozen=True)
class OrderedCollectionPage(Composite):
    """An ordered subset of the items of an :class:`OrderedCollection`."""

    part_of: str
    base: OrderedCollection = field(default_factory=OrderedCollection)
    next: Optional[str] = None
    prev: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        out["partOf"] = self.part_of
        put(out, "next", self.next)
        put(out, "prev", self.prev)
        return out

    @classmethod
    def from_dict(
        cls, data: Any, path: Optional[str] = None, item_type: Any = None,
    ) -> OrderedCollectionPage:
        data = expect_object(data, path)
        return cls(
            base=OrderedCollection.from_dict(without(data, _PAGE_KEYS), path, item_type),
            part_of=req_str(data, "partOf", path),
            next=opt_str(data, "next", path),
            prev=opt_str(data, "prev", path),
        )
