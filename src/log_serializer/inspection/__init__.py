"""Inspection – reflective field access and default instances."""
from log_serializer.inspection.defaults import default_instance, register_zero_value
from log_serializer.inspection.inspector import (
    FieldDescriptor,
    ReflectiveTypeInspector,
    TypeInspector,
)

__all__ = [
    "FieldDescriptor",
    "ReflectiveTypeInspector",
    "TypeInspector",
    "default_instance",
    "register_zero_value",
]
