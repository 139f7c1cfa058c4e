"""Encoding – StructuredEncoder.

Turns an arbitrary value into a JSON-compatible tree and dumps it as text.
Composite objects are walked through a
:class:`~log_serializer.inspection.TypeInspector`; a *field hook* sees every
field value before it is encoded and may replace it.  The hook is the only
extension point, the traversal order and formatting stay here.
"""
from __future__ import annotations

import contextlib
import json
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, Callable

from pydantic_core import PydanticSerializationError, to_jsonable_python

from log_serializer.encoding.options import EncoderOptions
from log_serializer.errors import CircularReferenceError, UnsupportedValueError
from log_serializer.inspection import FieldDescriptor, ReflectiveTypeInspector, TypeInspector

FieldHook = Callable[[FieldDescriptor, Any], Any]

_SCALARS = (str, int, float, bool)


class StructuredEncoder:
    """JSON encoder with a per-field value hook.

    Usage::

        encoder = StructuredEncoder(EncoderOptions(indent=None))
        encoder.encode(order)
        encoder.encode(order, field_hook=lambda field, value: value)
    """

    def __init__(
        self,
        options: EncoderOptions | None = None,
        inspector: TypeInspector | None = None,
    ) -> None:
        self._options = options or EncoderOptions()
        self._inspector = inspector or ReflectiveTypeInspector()

    @property
    def options(self) -> EncoderOptions:
        return self._options

    def encode(self, value: Any, field_hook: FieldHook | None = None) -> str:
        """Encode *value* as JSON text.

        Raises
        ------
        CircularReferenceError
            When *value* refers back to an object still being encoded.
        UnsupportedValueError
            When a leaf value has no JSON representation.
        """
        tree = self.to_primitive(value, field_hook)
        opts = self._options
        return json.dumps(
            tree,
            indent=opts.indent,
            separators=(",", ":") if opts.indent is None else (",", ": "),
            sort_keys=opts.sort_keys,
            ensure_ascii=opts.ensure_ascii,
        )

    def to_primitive(self, value: Any, field_hook: FieldHook | None = None) -> Any:
        """Return the JSON-compatible tree :meth:`encode` would dump."""
        return _Traversal(self._options, self._inspector, field_hook).visit(value)


class _Traversal:
    """One encoding pass; tracks the objects on the current path."""

    def __init__(
        self,
        options: EncoderOptions,
        inspector: TypeInspector,
        field_hook: FieldHook | None,
    ) -> None:
        self._options = options
        self._inspector = inspector
        self._hook = field_hook
        self._active: set[int] = set()

    def visit(self, value: Any) -> Any:
        if value is None or isinstance(value, _SCALARS) and not isinstance(value, Enum):
            return value
        if isinstance(value, Enum):
            return value.name if self._options.enums_as_text else self.visit(value.value)
        if isinstance(value, Mapping):
            with self._enter(value):
                return {self._key(k): self.visit(v) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            with self._enter(value):
                return [self.visit(item) for item in value]
        if self._inspector.is_composite(value):
            with self._enter(value):
                return self._visit_fields(value)
        return self._leaf(value)

    def _visit_fields(self, obj: Any) -> dict[str, Any]:
        naming = self._options.naming
        result: dict[str, Any] = {}
        for descriptor in self._inspector.fields_of(obj):
            value = self._inspector.read(obj, descriptor)
            if self._hook is not None:
                value = self._hook(descriptor, value)
            result[naming.apply(descriptor.name)] = self.visit(value)
        return result

    def _key(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if isinstance(key, Enum) and self._options.enums_as_text:
            return key.name
        return str(key)

    def _leaf(self, value: Any) -> Any:
        try:
            return to_jsonable_python(value)
        except PydanticSerializationError as exc:
            raise UnsupportedValueError(
                f"Cannot encode value of type {type(value).__qualname__!r}",
                payload_type=type(value).__qualname__,
                cause=exc,
            ) from exc

    @contextlib.contextmanager
    def _enter(self, value: Any) -> Iterator[None]:
        marker = id(value)
        if marker in self._active:
            raise CircularReferenceError(type(value).__qualname__)
        self._active.add(marker)
        try:
            yield
        finally:
            self._active.discard(marker)


__all__ = ["FieldHook", "StructuredEncoder"]
