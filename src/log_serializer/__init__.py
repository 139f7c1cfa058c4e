"""
log_serializer – serialize objects for logging with sensitive fields masked.

Import path convention::

    from log_serializer import serialize, destructure, configure
    from log_serializer import Sensitive, sensitive_field, MaskingPolicy
    from log_serializer.observability import MaskingProcessor
    from log_serializer.config import configure_from_env
"""
from log_serializer.encoding import EncoderOptions, NamingPolicy, StructuredEncoder
from log_serializer.markers import Sensitive, sensitive_field, sensitive_property
from log_serializer.masking import (
    DEFAULT_MASK_TEXT,
    LogSerializer,
    MaskingPolicy,
    SensitiveField,
    configure,
    current_policy,
    destructure,
    serialize,
    to_primitive,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_MASK_TEXT",
    "EncoderOptions",
    "LogSerializer",
    "MaskingPolicy",
    "NamingPolicy",
    "Sensitive",
    "SensitiveField",
    "StructuredEncoder",
    "__version__",
    "configure",
    "current_policy",
    "destructure",
    "sensitive_field",
    "sensitive_property",
    "serialize",
    "to_primitive",
]
