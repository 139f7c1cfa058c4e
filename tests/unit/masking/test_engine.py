"""Unit tests for masking – LogSerializer decisions and the default policy."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Annotated, Any

import pytest

from log_serializer import (
    LogSerializer,
    MaskingPolicy,
    Sensitive,
    configure,
    current_policy,
    serialize,
    to_primitive,
)
from log_serializer.inspection import FieldDescriptor, ReflectiveTypeInspector
from log_serializer.masking import Decision


@dataclass
class Holder:
    value: Any = None


@dataclass
class Secret:
    code: Annotated[str, Sensitive()]
    note: str


class Required:
    def __init__(self, arg: str) -> None:
        self.arg = arg


def _field(sensitive: bool) -> FieldDescriptor:
    return FieldDescriptor(name="value", declaring_type=Holder, sensitive=sensitive)


class TestDecide:
    def test_not_sensitive_passes_through(self) -> None:
        decision = LogSerializer().decide(_field(False), "real", MaskingPolicy())
        assert decision.kind is Decision.PASS_THROUGH
        assert decision.value == "real"

    def test_sensitive_string_masked(self) -> None:
        decision = LogSerializer().decide(_field(True), "real", MaskingPolicy(mask_text="#"))
        assert decision.kind is Decision.MASKED_SCALAR
        assert decision.value == "#"

    def test_sensitive_none_stays_none(self) -> None:
        decision = LogSerializer().decide(_field(True), None, MaskingPolicy())
        assert decision.kind is Decision.PASS_THROUGH
        assert decision.value is None

    def test_sensitive_composite_defaulted(self) -> None:
        decision = LogSerializer().decide(_field(True), Holder(value=1), MaskingPolicy())
        assert decision.kind is Decision.MASKED_OBJECT
        assert decision.value == Holder()

    def test_sensitive_composite_without_default_omitted(self) -> None:
        decision = LogSerializer().decide(_field(True), Required("x"), MaskingPolicy())
        assert decision.kind is Decision.OMITTED
        assert decision.value is None

    def test_omission_logged_without_value(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="log_serializer.masking.engine"):
            LogSerializer().decide(_field(True), Required("top-secret"), MaskingPolicy())
        assert "Holder.value" in caplog.text
        assert "top-secret" not in caplog.text

    def test_rule_makes_field_sensitive(self) -> None:
        policy = MaskingPolicy().add_sensitive_field("value", "Holder")
        decision = LogSerializer().decide(_field(False), "real", policy)
        assert decision.kind is Decision.MASKED_SCALAR

    def test_custom_inspector_is_used(self) -> None:
        class NoDefaults(ReflectiveTypeInspector):
            def default_instance(self, cls: type) -> tuple[bool, Any]:
                return False, None

        decision = LogSerializer(NoDefaults()).decide(_field(True), Holder(), MaskingPolicy())
        assert decision.kind is Decision.OMITTED


class TestToPrimitive:
    def test_masked_tree(self) -> None:
        assert to_primitive(Secret(code="1234", note="hi")) == {"code": "*****", "note": "hi"}

    def test_scalars_unchanged(self) -> None:
        assert to_primitive(5) == 5
        assert to_primitive(None) is None


class TestConfigure:
    def test_configure_replaces_previous_rules(self) -> None:
        configure(lambda p: p.add_sensitive_field("note"))
        configure(lambda p: setattr(p, "mask_text", "#"))
        assert to_primitive(Secret(code="1234", note="hi")) == {"code": "#", "note": "hi"}

    def test_failed_mutator_keeps_previous_default(self) -> None:
        configure(lambda p: p.add_sensitive_field("note"))

        def broken(policy: MaskingPolicy) -> None:
            policy.mask_text = "#"
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            configure(broken)
        assert to_primitive(Secret(code="1234", note="hi")) == {"code": "*****", "note": "*****"}

    def test_current_policy_is_a_copy(self) -> None:
        configure(lambda p: p.add_sensitive_field("note"))
        snapshot = current_policy()
        snapshot.sensitive_fields.clear()
        assert current_policy().sensitive_fields != []

    def test_explicit_policy_bypasses_default(self) -> None:
        configure(lambda p: p.add_sensitive_field("note"))
        assert to_primitive(Secret(code="1", note="hi"), MaskingPolicy()) == {
            "code": "*****",
            "note": "hi",
        }

    def test_readers_see_whole_policies_only(self) -> None:
        secret = Secret(code="1234", note="hi")
        expected = {
            serialize(secret, MaskingPolicy()),
            serialize(secret, MaskingPolicy(mask_text="#").add_sensitive_field("note")),
        }
        seen: set[str] = set()
        stop = threading.Event()

        def reader() -> None:
            while not stop.is_set():
                seen.add(serialize(secret))

        def setup(policy: MaskingPolicy) -> None:
            policy.mask_text = "#"
            policy.add_sensitive_field("note")

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for i in range(200):
            configure(setup if i % 2 else (lambda _: None))
        stop.set()
        for t in threads:
            t.join()
        assert seen <= expected
