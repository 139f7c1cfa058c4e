"""Inspection – default (zero-valued) instances.

A masked composite is replaced with an instance built without any of the
original field values.  Value types that cannot be called without
arguments get a registered zero value instead.
"""
from __future__ import annotations

import enum
import threading
import uuid
from datetime import date, datetime
from typing import Any, Callable

_ZERO_FACTORIES: dict[type, Callable[[], Any]] = {
    datetime: lambda: datetime.min,
    date: lambda: date.min,
    uuid.UUID: lambda: uuid.UUID(int=0),
}
_lock = threading.Lock()


def register_zero_value(cls: type, factory: Callable[[], Any]) -> None:
    """Register *factory* as the zero value for *cls* (exact type match)."""
    with _lock:
        _ZERO_FACTORIES[cls] = factory


def default_instance(cls: type) -> tuple[bool, Any]:
    """Try to build a default instance of *cls*.

    Returns ``(True, instance)`` on success and ``(False, None)`` when *cls*
    offers no parameterless construction or its constructor raises.  Enum
    types never have a neutral member and always fail.
    """
    factory = _ZERO_FACTORIES.get(cls)
    if factory is not None:
        return True, factory()
    if issubclass(cls, enum.Enum):
        return False, None
    try:
        return True, cls()
    except Exception:  # noqa: BLE001
        # any constructor failure means there is no default
        return False, None


__all__ = ["default_instance", "register_zero_value"]
