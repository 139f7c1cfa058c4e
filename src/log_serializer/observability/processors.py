"""Observability – structlog processor and get_logger helper.

``MaskingProcessor`` replaces composite values in the event dict with their
masked primitive tree so any renderer downstream only sees masked data.
"""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

import structlog

from log_serializer.inspection import ReflectiveTypeInspector, TypeInspector
from log_serializer.masking import LogSerializer, MaskingPolicy

_RESERVED_KEYS = frozenset({"timestamp", "level", "logger", "exc_info", "stack_info"})


class MaskingProcessor:
    """structlog processor masking sensitive fields of logged objects.

    Scalars, strings and reserved keys such as ``exc_info`` are left alone.
    Mappings, sequences and composite objects are converted with
    :meth:`~log_serializer.masking.LogSerializer.to_primitive`, including an
    object logged as the event itself (``log.info(customer)``).

    Usage::

        import structlog
        from log_serializer.observability import MaskingProcessor

        structlog.configure(processors=[MaskingProcessor(), ..., structlog.processors.JSONRenderer()])
        structlog.get_logger().info("order.placed", order=order)

    Parameters
    ----------
    policy:
        Explicit policy.  ``None`` uses the process-wide default at call time.
    inspector:
        Inspector used to tell composites apart and read their fields.
    """

    def __init__(
        self,
        policy: MaskingPolicy | None = None,
        inspector: TypeInspector | None = None,
    ) -> None:
        self._policy = policy
        self._inspector = inspector or ReflectiveTypeInspector()
        self._serializer = LogSerializer(self._inspector)

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key, value in event_dict.items():
            if key in _RESERVED_KEYS or not self._needs_masking(value):
                continue
            event_dict[key] = self._serializer.to_primitive(value, self._policy)
        return event_dict

    def _needs_masking(self, value: Any) -> bool:
        if isinstance(value, (Mapping, list, tuple, set, frozenset)):
            return True
        return self._inspector.is_composite(value)


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["MaskingProcessor", "get_logger"]
