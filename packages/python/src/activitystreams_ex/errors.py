"""Typed failures raised while building and parsing documents."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ActivityStreamsError(Exception):
    """Base class for all activitystreams-ex errors."""


class ParseError(ActivityStreamsError, ValueError):
    """A wire payload is malformed or does not fit the expected shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class KeyResolutionAmbiguity(ParseError):
    """A polymorphic value matched none of its declared variants."""

    def __init__(
        self,
        value: Any,
        variants: Sequence[type],
        path: Optional[str] = None,
    ):
        self.value = value
        self.variants = tuple(variants)
        names = " or ".join(v.__name__ for v in self.variants)
        super().__init__(
            f"cannot resolve {type(value).__name__} value as {names}", path,
        )


class BuildError(ActivityStreamsError, ValueError):
    """A builder was finalized without one of its required fields."""

    def __init__(self, entity: str, field_name: str):
        self.entity = entity
        self.field_name = field_name
        super().__init__(f"{entity} requires '{field_name}' to be set")


class KeyFormatError(ActivityStreamsError, ValueError):
    """An actor's public key cannot be loaded."""
