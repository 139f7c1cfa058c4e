"""Encoding – formatting options and field naming policies."""
from __future__ import annotations

import dataclasses
import functools
import re
from enum import Enum
from typing import Any

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class NamingPolicy(str, Enum):
    """How field names are written to the output."""

    PRESERVE = "preserve"
    SNAKE_CASE = "snake_case"
    CAMEL_CASE = "camel_case"
    PASCAL_CASE = "pascal_case"
    KEBAB_CASE = "kebab_case"

    def apply(self, name: str) -> str:
        if self is NamingPolicy.PRESERVE:
            return name
        return _convert(self, name)


@functools.lru_cache(maxsize=4096)
def _convert(policy: NamingPolicy, name: str) -> str:
    words = [
        word
        for chunk in re.split(r"[_\-\s]+", name)
        for word in _WORD_BOUNDARY.split(chunk)
        if word
    ]
    if not words:
        return name
    if policy is NamingPolicy.SNAKE_CASE:
        return "_".join(w.lower() for w in words)
    if policy is NamingPolicy.KEBAB_CASE:
        return "-".join(w.lower() for w in words)
    if policy is NamingPolicy.PASCAL_CASE:
        return "".join(w.capitalize() for w in words)
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


@dataclasses.dataclass(frozen=True, slots=True)
class EncoderOptions:
    """Formatting configuration for :class:`~log_serializer.encoding.StructuredEncoder`.

    Parameters
    ----------
    indent:
        Spaces per nesting level.  ``None`` writes compact single-line JSON.
    naming:
        Conversion applied to field names of composite objects.  Mapping
        keys are written unchanged.
    enums_as_text:
        Write enum members by name instead of by value.
    sort_keys:
        Sort object keys in the output.
    ensure_ascii:
        Escape non-ASCII characters.
    """

    indent: int | None = 2
    naming: NamingPolicy = NamingPolicy.PRESERVE
    enums_as_text: bool = True
    sort_keys: bool = False
    ensure_ascii: bool = False

    def evolve(self, **changes: Any) -> EncoderOptions:
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)


__all__ = ["EncoderOptions", "NamingPolicy"]
