"""Masking – LogSerializer engine and the process-wide default policy.

For every field the encoder visits the engine decides what gets encoded:

* not sensitive – the real value;
* sensitive ``str`` – the policy's mask text;
* sensitive ``None`` – ``None`` (a missing value is never masked);
* sensitive composite – a default instance of the value's *runtime* class,
  whose own sensitive fields are masked in turn, or ``None`` when the class
  cannot be built.

Sensitivity comes from the field's declared metadata; the replacement comes
from the runtime value, so a subclass instance is never defaulted to its
base class.
"""
from __future__ import annotations

import dataclasses
import enum
import logging
import threading
from typing import Any, Callable

from log_serializer.encoding import FieldHook, StructuredEncoder
from log_serializer.inspection import FieldDescriptor, ReflectiveTypeInspector, TypeInspector
from log_serializer.masking.policy import MaskingPolicy

logger = logging.getLogger(__name__)


class Decision(str, enum.Enum):
    """Outcome of the masking decision for one field."""

    PASS_THROUGH = "pass_through"
    MASKED_SCALAR = "masked_scalar"
    MASKED_OBJECT = "masked_object"
    OMITTED = "omitted"


@dataclasses.dataclass(frozen=True, slots=True)
class FieldDecision:
    kind: Decision
    value: Any = None


class _DefaultPolicySlot:
    """Single process-wide policy reference.

    Writers publish a fully built policy under a lock; readers take one
    reference read and keep that snapshot for the whole call.
    """

    def __init__(self) -> None:
        self._policy = MaskingPolicy()
        self._lock = threading.Lock()

    def get(self) -> MaskingPolicy:
        return self._policy

    def publish(self, policy: MaskingPolicy) -> None:
        with self._lock:
            self._policy = policy


_default_slot = _DefaultPolicySlot()


class LogSerializer:
    """Serializes objects for logging with sensitive fields masked.

    Parameters
    ----------
    inspector:
        Reflective access to fields.  Defaults to
        :class:`~log_serializer.inspection.ReflectiveTypeInspector`.
    """

    def __init__(self, inspector: TypeInspector | None = None) -> None:
        self._inspector = inspector or ReflectiveTypeInspector()

    def decide(self, field: FieldDescriptor, value: Any, policy: MaskingPolicy) -> FieldDecision:
        """Decide what to encode for *field* currently holding *value*."""
        sensitive = policy.is_sensitive(
            field.name, field.type_name, field.full_type_name, field.sensitive
        )
        if not sensitive or value is None:
            return FieldDecision(Decision.PASS_THROUGH, value)
        if isinstance(value, str):
            return FieldDecision(Decision.MASKED_SCALAR, policy.mask_text)
        built, instance = self._inspector.default_instance(type(value))
        if not built:
            logger.debug(
                "No default instance for %s.%s; field rendered as null",
                field.type_name,
                field.name,
            )
            return FieldDecision(Decision.OMITTED)
        return FieldDecision(Decision.MASKED_OBJECT, instance)

    def serialize(self, obj: Any, policy: MaskingPolicy | None = None) -> str:
        """Serialize *obj* to JSON text with sensitive fields masked."""
        policy = policy or _default_slot.get()
        return self._encoder(policy).encode(obj, self._field_hook(policy))

    def to_primitive(self, obj: Any, policy: MaskingPolicy | None = None) -> Any:
        """Masked JSON-compatible tree of *obj* (what :meth:`serialize` dumps)."""
        policy = policy or _default_slot.get()
        return self._encoder(policy).to_primitive(obj, self._field_hook(policy))

    def destructure(self, obj: Any, policy: MaskingPolicy | None = None) -> dict[str, str]:
        """Flatten the own fields of *obj* into a ``name -> text`` mapping.

        Fields holding ``None`` are left out.  Nested objects are rendered as
        JSON text; a sensitive composite without a default instance renders
        as ``"null"``, the same as inside :meth:`serialize`.
        """
        if obj is None:
            return {}
        policy = policy or _default_slot.get()
        result: dict[str, str] = {}
        for field in self._inspector.fields_of(obj):
            value = self._inspector.read(obj, field)
            if value is None:
                continue
            decision = self.decide(field, value, policy)
            if isinstance(decision.value, str):
                result[field.name] = decision.value
            else:
                result[field.name] = self.serialize(decision.value, policy)
        return result

    def _encoder(self, policy: MaskingPolicy) -> StructuredEncoder:
        return StructuredEncoder(policy.encoder_options, self._inspector)

    def _field_hook(self, policy: MaskingPolicy) -> FieldHook:
        def hook(field: FieldDescriptor, value: Any) -> Any:
            return self.decide(field, value, policy).value

        return hook


_serializer = LogSerializer()


def serialize(obj: Any, policy: MaskingPolicy | None = None) -> str:
    """Serialize *obj* using *policy* or the process-wide default."""
    return _serializer.serialize(obj, policy)


def to_primitive(obj: Any, policy: MaskingPolicy | None = None) -> Any:
    return _serializer.to_primitive(obj, policy)


def destructure(obj: Any, policy: MaskingPolicy | None = None) -> dict[str, str]:
    """Destructure *obj* using *policy* or the process-wide default."""
    return _serializer.destructure(obj, policy)


def configure(mutator: Callable[[MaskingPolicy], Any]) -> None:
    """Replace the process-wide default policy.

    *mutator* receives a brand-new :class:`MaskingPolicy`; once it returns,
    that policy becomes the default.  Earlier ``configure`` calls do not
    accumulate.  If *mutator* raises, the previous default stays in place.
    """
    policy = MaskingPolicy()
    mutator(policy)
    _default_slot.publish(policy)


def current_policy() -> MaskingPolicy:
    """Copy of the process-wide default policy."""
    return _default_slot.get().copy()


__all__ = [
    "Decision",
    "FieldDecision",
    "LogSerializer",
    "configure",
    "current_policy",
    "destructure",
    "serialize",
    "to_primitive",
]
