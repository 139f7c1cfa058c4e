"""Masking – sensitive-field policy and the serialization engine."""
from log_serializer.masking.engine import (
    Decision,
    FieldDecision,
    LogSerializer,
    configure,
    current_policy,
    destructure,
    serialize,
    to_primitive,
)
from log_serializer.masking.policy import DEFAULT_MASK_TEXT, MaskingPolicy, SensitiveField

__all__ = [
    "DEFAULT_MASK_TEXT",
    "Decision",
    "FieldDecision",
    "LogSerializer",
    "MaskingPolicy",
    "SensitiveField",
    "configure",
    "current_policy",
    "destructure",
    "serialize",
    "to_primitive",
]
