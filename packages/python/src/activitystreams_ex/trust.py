"""Public keys of actors, for the signature layer that verifies them.

Only key loading lives here. Signing and verifying requests happen in
the delivery layer, which takes the key object returned below.
"""

from __future__ import annotations

from typing import Any

import cryptography.hazmat.primitives.serialization as c_ser

from cryptography.exceptions import UnsupportedAlgorithm

from activitystreams_ex.actor import Actor, PublicKeyInfo
from activitystreams_ex.errors import KeyFormatError


def load_public_key(source: Actor | PublicKeyInfo) -> Any:
    """Load the PEM public key of an actor.

    Args:
        source: An :class:`Actor` carrying ``publicKey``, or the
            :class:`PublicKeyInfo` block itself.

    Returns:
        A ``cryptography`` public key object (RSA, EC or Ed25519).

    Raises:
        KeyFormatError: If the actor has no key or the PEM is malformed.
    """
    info = source.public_key_info if isinstance(source, Actor) else source
    if info is None:
        raise KeyFormatError("Actor has no publicKey")
    try:
        return c_ser.load_pem_public_key(info.public_key_pem.encode("utf-8"))
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Malformed public key {info.id!r}: {exc}") from exc


def owns_key(actor: Actor) -> bool:
    """True if the actor's ``publicKey.owner`` is the actor's own ``id``."""
    info = actor.public_key_info
    return info is not None and actor.base.id is not None and info.owner == actor.base.id
