"""Shared fixtures: every test starts from a fresh default policy."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from log_serializer import configure


@pytest.fixture(autouse=True)
def reset_default_policy() -> Iterator[None]:
    configure(lambda _: None)
    yield
    configure(lambda _: None)
