"""Actors: objects capable of performing activities.

An :class:`Actor` embeds an :class:`~activitystreams_ex.object.Object` in
``base`` and adds the ActivityPub endpoints plus the optional public key
read by :mod:`activitystreams_ex.trust`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from activitystreams_ex._wire import (
    expect_object,
    opt_entity,
    opt_str,
    put,
    req_str,
    without,
)
from activitystreams_ex.object import Composite, Link, Object

ACTOR_TYPES: tuple[str, ...] = (
    "Application",
    "Group",
    "Organization",
    "Person",
    "Service",
)

_OWN_KEYS = (
    "preferredUsername",
    "inbox",
    "outbox",
    "followers",
    "following",
    "liked",
    "publicKey",
)


@dataclass(frozen=True)
class PublicKeyInfo:
    """``publicKey`` block of an actor (id, owner and PEM-encoded key)."""

    id: str
    owner: str
    public_key_pem: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner": self.owner,
            "publicKeyPem": self.public_key_pem,
        }

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> PublicKeyInfo:
        data = expect_object(data, path)
        return cls(
            id=req_str(data, "id", path),
            owner=req_str(data, "owner", path),
            public_key_pem=req_str(data, "publicKeyPem", path),
        )


@dataclass(frozen=True)
class Actor(Composite):
    """An Object plus actor endpoints.

    ``inbox`` and ``outbox`` are required by ActivityPub but optional here;
    the model does not enforce federation rules.
    """

    base: Object = field(default_factory=Object)
    preferred_username: Optional[str] = None
    inbox: Optional[str] = None
    outbox: Optional[str] = None
    followers: Optional[str] = None
    following: Optional[str] = None
    liked: Optional[str] = None
    public_key_info: Optional[PublicKeyInfo] = None

    accepts = staticmethod(Object.accepts)

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        put(out, "preferredUsername", self.preferred_username)
        put(out, "inbox", self.inbox)
        put(out, "outbox", self.outbox)
        put(out, "followers", self.followers)
        put(out, "following", self.following)
        put(out, "liked", self.liked)
        put(out, "publicKey", self.public_key_info)
        return out

    @classmethod
    def from_dict(cls, data: Any, path: Optional[str] = None) -> Actor:
        data = expect_object(data, path)
        return cls(
            base=Object.from_dict(without(data, _OWN_KEYS), path),
            preferred_username=opt_str(data, "preferredUsername", path),
            inbox=opt_str(data, "inbox", path),
            outbox=opt_str(data, "outbox", path),
            followers=opt_str(data, "followers", path),
            following=opt_str(data, "following", path),
            liked=opt_str(data, "liked", path),
            public_key_info=opt_entity(data, "publicKey", PublicKeyInfo, path),
        )


ActorReference = Union[Actor, Link]

ACTOR_REFERENCE_VARIANTS: tuple[type, ...] = (Actor, Link)
