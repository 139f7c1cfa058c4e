"""Property tests for masking invariants."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from log_serializer import (
    MaskingPolicy,
    Sensitive,
    StructuredEncoder,
    destructure,
    serialize,
)


@dataclass
class Plain:
    name: str | None
    count: int
    tags: list[str]


@dataclass
class Marked:
    secret: Annotated[str | None, Sensitive()]
    visible: str | None


_fixture_ok = settings(suppress_health_check=[HealthCheck.function_scoped_fixture])

plain_values = st.builds(
    Plain,
    name=st.none() | st.text(),
    count=st.integers(),
    tags=st.lists(st.text(), max_size=3),
)


class TestMaskingProperties:
    @_fixture_ok
    @given(plain_values)
    def test_no_sensitive_fields_is_a_noop(self, value: Plain) -> None:
        policy = MaskingPolicy()
        assert serialize(value, policy) == StructuredEncoder(policy.encoder_options).encode(value)

    @_fixture_ok
    @given(st.text(), st.text(min_size=1))
    def test_mask_text_is_verbatim(self, secret: str, mask: str) -> None:
        policy = MaskingPolicy(mask_text=mask)
        rendered = json.loads(serialize(Marked(secret=secret, visible="v"), policy))
        assert rendered["secret"] == mask
        assert destructure(Marked(secret=secret, visible="v"), policy)["secret"] == mask

    @_fixture_ok
    @given(st.none() | st.text(), st.none() | st.text())
    def test_destructure_is_sparse(self, secret: str | None, visible: str | None) -> None:
        result = destructure(Marked(secret=secret, visible=visible), MaskingPolicy())
        assert set(result) <= {"secret", "visible"}
        assert ("secret" in result) == (secret is not None)
        assert ("visible" in result) == (visible is not None)

    @_fixture_ok
    @given(st.text())
    def test_sensitive_none_never_masked(self, visible: str) -> None:
        rendered = json.loads(serialize(Marked(secret=None, visible=visible), MaskingPolicy()))
        assert rendered["secret"] is None
        assert rendered["visible"] == visible
