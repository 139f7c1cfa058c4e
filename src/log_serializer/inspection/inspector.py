"""Inspection – reflective type inspector.

Enumerates the public, readable, instance-level fields of an object:

* dataclasses – :func:`dataclasses.fields` plus public properties;
* pydantic models – ``model_fields`` plus properties declared below
  :class:`pydantic.BaseModel`;
* plain classes – non-``ClassVar`` annotations, public properties and any
  other public attribute found in the instance ``__dict__``.

Names starting with ``_`` are never fields.  Class metadata is cached per
class; instance attributes of plain objects are read per call.
"""
from __future__ import annotations

import dataclasses
import functools
import inspect
import typing
import uuid
from collections.abc import Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, ClassVar, Protocol, get_origin

import pydantic

from log_serializer.inspection.defaults import default_instance
from log_serializer.markers import (
    SENSITIVE_METADATA_KEY,
    has_sensitive_marker,
    is_marker,
    sensitive_property,
)

_LEAF_TYPES: tuple[type, ...] = (
    str, bytes, bytearray, memoryview, bool, int, float, complex,
    Enum, date, time, timedelta, Decimal, uuid.UUID, PurePath, type,
)
_CONTAINER_TYPES: tuple[type, ...] = (Mapping, list, tuple, set, frozenset)


@dataclasses.dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Declared metadata of one readable field."""

    name: str
    declaring_type: type
    declared_type: Any = Any
    sensitive: bool = False

    @property
    def type_name(self) -> str:
        """Short name of the declaring class."""
        return self.declaring_type.__name__

    @property
    def full_type_name(self) -> str:
        """Fully-qualified name of the declaring class."""
        return f"{self.declaring_type.__module__}.{self.declaring_type.__qualname__}"


class TypeInspector(Protocol):
    """Port: reflective access to fields of unknown types."""

    def fields(self, cls: type) -> tuple[FieldDescriptor, ...]: ...
    def fields_of(self, obj: Any) -> tuple[FieldDescriptor, ...]: ...
    def read(self, obj: Any, descriptor: FieldDescriptor) -> Any: ...
    def is_composite(self, value: Any) -> bool: ...
    def default_instance(self, cls: type) -> tuple[bool, Any]: ...


class ReflectiveTypeInspector:
    """:class:`TypeInspector` built on runtime introspection."""

    def fields(self, cls: type) -> tuple[FieldDescriptor, ...]:
        return _describe(cls)

    def fields_of(self, obj: Any) -> tuple[FieldDescriptor, ...]:
        """Fields of *obj*, including undeclared public instance attributes."""
        cls = type(obj)
        declared = _describe(cls)
        if dataclasses.is_dataclass(obj) or isinstance(obj, pydantic.BaseModel):
            return declared
        attrs: dict[str, Any] = getattr(obj, "__dict__", {})
        present = [d for d in declared if d.name in attrs or hasattr(cls, d.name)]
        known = {d.name for d in declared}
        extra = [
            FieldDescriptor(name=name, declaring_type=cls)
            for name in attrs
            if _is_public(name) and name not in known
        ]
        return tuple(present + extra)

    def read(self, obj: Any, descriptor: FieldDescriptor) -> Any:
        return getattr(obj, descriptor.name)

    def is_composite(self, value: Any) -> bool:
        if value is None or isinstance(value, _LEAF_TYPES + _CONTAINER_TYPES):
            return False
        if dataclasses.is_dataclass(value) or isinstance(value, pydantic.BaseModel):
            return True
        if inspect.isroutine(value) or inspect.ismodule(value):
            return False
        return hasattr(value, "__dict__")

    def default_instance(self, cls: type) -> tuple[bool, Any]:
        return default_instance(cls)


# ---------------------------------------------------------------------------
# Class metadata
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1024)
def _describe(cls: type) -> tuple[FieldDescriptor, ...]:
    if issubclass(cls, pydantic.BaseModel):
        return _describe_model(cls)
    if dataclasses.is_dataclass(cls):
        return _describe_dataclass(cls)
    return _describe_plain(cls)


def _describe_dataclass(cls: type) -> tuple[FieldDescriptor, ...]:
    hints = _type_hints(cls)
    fields = tuple(
        FieldDescriptor(
            name=f.name,
            declaring_type=_declaring_type(cls, f.name),
            declared_type=hints.get(f.name, f.type),
            sensitive=bool(f.metadata.get(SENSITIVE_METADATA_KEY))
            or has_sensitive_marker(hints.get(f.name)),
        )
        for f in dataclasses.fields(cls)
        if _is_public(f.name)
    )
    return fields + _describe_properties(cls, {f.name for f in fields})


def _describe_model(cls: type[pydantic.BaseModel]) -> tuple[FieldDescriptor, ...]:
    fields = tuple(
        FieldDescriptor(
            name=name,
            declaring_type=_declaring_type(cls, name),
            declared_type=info.annotation,
            sensitive=any(is_marker(m) for m in info.metadata)
            or has_sensitive_marker(info.annotation),
        )
        for name, info in cls.model_fields.items()
        if _is_public(name)
    )
    return fields + _describe_properties(
        cls, {f.name for f in fields}, stop=pydantic.BaseModel
    )


def _describe_plain(cls: type) -> tuple[FieldDescriptor, ...]:
    fields = tuple(
        FieldDescriptor(
            name=name,
            declaring_type=_declaring_type(cls, name),
            declared_type=hint,
            sensitive=has_sensitive_marker(hint),
        )
        for name, hint in _type_hints(cls).items()
        if _is_public(name) and not _is_class_var(hint)
    )
    return fields + _describe_properties(cls, {f.name for f in fields})


def _describe_properties(
    cls: type,
    exclude: set[str],
    stop: type = object,
) -> tuple[FieldDescriptor, ...]:
    seen = set(exclude)
    result: list[FieldDescriptor] = []
    for klass in cls.__mro__:
        if klass is stop or klass is object:
            break
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            # a subclass attribute shadows a base-class property of the same name
            seen.add(name)
            if not isinstance(attr, property) or not _is_public(name):
                continue
            returns = _type_hints(attr.fget).get("return", Any) if attr.fget else Any
            result.append(
                FieldDescriptor(
                    name=name,
                    declaring_type=klass,
                    declared_type=returns,
                    sensitive=isinstance(attr, sensitive_property)
                    or has_sensitive_marker(returns),
                )
            )
    return tuple(result)


def _declaring_type(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass) or name in vars(klass):
            return klass
    return cls


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError):
        # unresolvable forward references: fall back to the raw annotations
        if not isinstance(obj, type):
            return dict(getattr(obj, "__annotations__", {}))
        merged: dict[str, Any] = {}
        for klass in reversed(obj.__mro__):
            merged.update(inspect.get_annotations(klass))
        return merged


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or get_origin(hint) is ClassVar


def _is_public(name: str) -> bool:
    return not name.startswith("_")


__all__ = ["FieldDescriptor", "ReflectiveTypeInspector", "TypeInspector"]
