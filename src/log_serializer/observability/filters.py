"""Observability – stdlib logging filter."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from log_serializer.inspection import ReflectiveTypeInspector
from log_serializer.masking import LogSerializer, MaskingPolicy

__all__ = ["MaskingLogFilter"]

_CONTAINERS = (Mapping, list, tuple, set, frozenset)


class MaskingLogFilter(logging.Filter):
    """Replaces composite or container ``msg``/``args`` of a record with masked JSON text.

    ::

        handler.addFilter(MaskingLogFilter())
        log.info("created %s", customer)   # customer rendered with secrets masked
    """

    def __init__(self, policy: MaskingPolicy | None = None, name: str = "") -> None:
        super().__init__(name)
        self._policy = policy
        self._inspector = ReflectiveTypeInspector()
        self._serializer = LogSerializer(self._inspector)

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.msg = self._mask(record.msg)
        if isinstance(record.args, dict):
            record.args = {k: self._mask(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._mask(arg) for arg in record.args)
        return True

    def _mask(self, value: Any) -> Any:
        if isinstance(value, _CONTAINERS) or self._inspector.is_composite(value):
            return self._serializer.serialize(value, self._policy)
        return value
