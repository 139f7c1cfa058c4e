"""Observability – masking for structlog and stdlib logging."""
from log_serializer.observability.factory import MaskingLoggerFactory, configure_logging
from log_serializer.observability.filters import MaskingLogFilter
from log_serializer.observability.processors import MaskingProcessor, get_logger

__all__ = [
    "MaskingLogFilter",
    "MaskingLoggerFactory",
    "MaskingProcessor",
    "configure_logging",
    "get_logger",
]
