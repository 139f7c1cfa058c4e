"""Per-field sensitive markers.

A field is marked sensitive in one of three ways::

    @dataclass
    class Customer:
        name: str
        email: Annotated[str, Sensitive()]
        card: Card = sensitive_field(default_factory=Card)

        @sensitive_property
        def token(self) -> str: ...

Markers are independent of :class:`~log_serializer.masking.policy.MaskingPolicy`
rules; either one makes a field sensitive.
"""
from __future__ import annotations

import dataclasses
import types
from typing import Annotated, Any, Union, get_args, get_origin

SENSITIVE_METADATA_KEY = "sensitive"


class Sensitive:
    """``Annotated`` marker flagging a field as sensitive.

    Both ``Annotated[str, Sensitive]`` and ``Annotated[str, Sensitive()]``
    are recognised.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "Sensitive()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Sensitive)

    def __hash__(self) -> int:
        return hash(Sensitive)


def sensitive_field(**kwargs: Any) -> Any:
    """Return a :func:`dataclasses.field` carrying the sensitive marker.

    Accepts every keyword :func:`dataclasses.field` accepts; an existing
    *metadata* mapping is preserved.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SENSITIVE_METADATA_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


class sensitive_property(property):  # noqa: N801
    """A :class:`property` whose value is treated as sensitive."""


def is_marker(obj: Any) -> bool:
    return obj is Sensitive or isinstance(obj, Sensitive)


def has_sensitive_marker(annotation: Any) -> bool:
    """Return ``True`` if *annotation* is ``Annotated[..., Sensitive]``.

    Optional forms such as ``Annotated[str, Sensitive()] | None`` count too.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        return any(is_marker(extra) for extra in get_args(annotation)[1:])
    if origin is Union or origin is types.UnionType:
        return any(has_sensitive_marker(arg) for arg in get_args(annotation))
    return False


__all__ = [
    "SENSITIVE_METADATA_KEY",
    "Sensitive",
    "has_sensitive_marker",
    "is_marker",
    "sensitive_field",
    "sensitive_property",
]
