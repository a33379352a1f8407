"""Activities: objects describing an action.

:class:`Activity` is a subtype of Object that describes some form of action
that may happen, is happening, or has happened. The Activity type itself
carries no semantics about the kind of action; that is the ``type``
string of its base Object (``Create``, ``Add``, ``Follow``, ...).

:class:`IntransitiveActivity` wraps an Activity and is identical on the
wire. Its ``object`` property is inappropriate by definition, but the model
does not remove the field: a caller may still set it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from activitystreams_ex._wire import (
    expect_object,
    join_path,
    opt_entity,
    opt_str,
    opt_str_list,
    put,
    without,
)
from activitystreams_ex.actor import ACTOR_REFERENCE_VARIANTS, ActorReference
from activitystreams_ex.object import Composite, Object, resolve_reference

_OWN_KEYS = ("actor", "object", "target", "result", "to", "origin", "instrument")


@dataclass(frozen=True)
class Activity(Composite):
    """An Object plus the participants of an action.

    ``result``, ``origin`` and ``instrument`` are opaque strings for now.
    ``to`` is kept as given: ``None`` is omitted, an empty tuple is
    written as ``[]``.
    """

    base: Object = field(default_factory=Object)
    actor: Optional[ActorReference] = None
    object: Optional[Object] = None
    target: Optional[Object] = None
    result: Optional[str] = None
    to: Optional[tuple[str, ...]] = None
    origin: Optional[str] = None  # TODO: Origin as Object-or-Link
    instrument: Optional[str] = None  # TODO: Instrument as Object-or-Link

    def __post_init__(self) -> None:
        if self.to is not None:
            object.__setattr__(self, "to", tuple(self.to))

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        put(out, "actor", self.actor)
        put(out, "object", self.object)
        put(out, "target", self.target)
        put(out, "result", self.result)
        put(out, "to", self.to)
        put(out, "origin", self.origin)
        put(out, "instrument", self.instrument)
        return out

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> Activity:
        data = expect_object(data, path)
        actor = None
        if data.get("actor") is not None:
            actor = resolve_reference(
                data["actor"], ACTOR_REFERENCE_VARIANTS, join_path(path, "actor"),
            )
        return cls(
            base=Object.from_dict(without(data, _OWN_KEYS), path),
            actor=actor,
            object=opt_entity(data, "object", Object, path),
            target=opt_entity(data, "target", Object, path),
            result=opt_str(data, "result", path),
            to=opt_str_list(data, "to", path),
            origin=opt_str(data, "origin", path),
            instrument=opt_str(data, "instrument", path),
        )


@dataclass(frozen=True)
class IntransitiveActivity(Composite):
    """An Activity without an ``object`` (``Arrive``, ``Travel``, ``Question``)."""

    base: Activity = field(default_factory=Activity)

    def to_dict(self) -> dict[str, Any]:
        return self.base.to_dict()

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> IntransitiveActivity:
        return cls(base=Activity.from_dict(data, path))
