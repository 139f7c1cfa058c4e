"""Encoding – structured JSON encoder with a per-field hook."""
from log_serializer.encoding.encoder import FieldHook, StructuredEncoder
from log_serializer.encoding.options import EncoderOptions, NamingPolicy

__all__ = ["EncoderOptions", "FieldHook", "NamingPolicy", "StructuredEncoder"]
