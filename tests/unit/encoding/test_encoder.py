"""Unit tests for encoding – StructuredEncoder."""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any

import pytest

from log_serializer.encoding import EncoderOptions, NamingPolicy, StructuredEncoder
from log_serializer.errors import CircularReferenceError, SerializationError, UnsupportedValueError
from log_serializer.inspection import FieldDescriptor


class Color(Enum):
    RED = "red"
    BLUE = "blue"


class Level(IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class Order:
    order_id: int
    customer_name: str
    color: Color = Color.RED


class Node:
    def __init__(self) -> None:
        self.children: list[Node] = []


_compact = StructuredEncoder(EncoderOptions(indent=None))


class TestEncodeScalars:
    def test_primitives(self) -> None:
        assert _compact.encode(None) == "null"
        assert _compact.encode(True) == "true"
        assert _compact.encode(3) == "3"
        assert _compact.encode("x") == '"x"'

    def test_enum_as_text(self) -> None:
        assert _compact.encode(Color.BLUE) == '"BLUE"'
        assert _compact.encode(Level.HIGH) == '"HIGH"'

    def test_enum_as_value(self) -> None:
        encoder = StructuredEncoder(EncoderOptions(indent=None, enums_as_text=False))
        assert encoder.encode(Color.BLUE) == '"blue"'
        assert encoder.encode(Level.HIGH) == "2"

    def test_leaf_values(self) -> None:
        value = {
            "day": date(2024, 1, 31),
            "id": uuid.UUID(int=1),
            "amount": Decimal("1.50"),
            "path": Path("/tmp/x"),
        }
        assert json.loads(_compact.encode(value)) == {
            "day": "2024-01-31",
            "id": "00000000-0000-0000-0000-000000000001",
            "amount": "1.50",
            "path": "/tmp/x",
        }

    def test_unsupported_leaf_raises(self) -> None:
        with pytest.raises(UnsupportedValueError) as exc_info:
            _compact.encode(object())
        assert isinstance(exc_info.value, SerializationError)
        assert exc_info.value.payload_type == "object"


class TestEncodeContainers:
    def test_sequences_and_sets(self) -> None:
        assert _compact.encode((1, 2)) == "[1,2]"
        assert _compact.encode(frozenset({"a"})) == '["a"]'

    def test_mapping_keys(self) -> None:
        assert _compact.encode({Color.RED: 1, 2: "b"}) == '{"RED":1,"2":"b"}'

    def test_mapping_keys_not_renamed(self) -> None:
        encoder = StructuredEncoder(EncoderOptions(indent=None, naming=NamingPolicy.CAMEL_CASE))
        assert encoder.encode({"some_key": 1}) == '{"some_key":1}'

    def test_shared_reference_is_not_a_cycle(self) -> None:
        shared = Node()
        root = Node()
        root.children = [shared, shared]
        assert _compact.encode(root) == '{"children":[{"children":[]},{"children":[]}]}'

    def test_cycle_raises(self) -> None:
        root = Node()
        root.children.append(root)
        with pytest.raises(CircularReferenceError):
            _compact.encode(root)

    def test_mapping_cycle_raises(self) -> None:
        data: dict[str, Any] = {}
        data["self"] = data
        with pytest.raises(CircularReferenceError):
            _compact.encode(data)


class TestEncodeObjects:
    def test_default_options_indent(self) -> None:
        result = StructuredEncoder().encode(Order(1, "Ann"))
        assert result == '{\n  "order_id": 1,\n  "customer_name": "Ann",\n  "color": "RED"\n}'

    def test_naming_policy(self) -> None:
        encoder = StructuredEncoder(EncoderOptions(indent=None, naming=NamingPolicy.PASCAL_CASE))
        assert encoder.encode(Order(1, "Ann")) == '{"OrderId":1,"CustomerName":"Ann","Color":"RED"}'

    def test_sort_keys(self) -> None:
        encoder = StructuredEncoder(EncoderOptions(indent=None, sort_keys=True))
        assert encoder.encode(Order(1, "Ann")) == '{"color":"RED","customer_name":"Ann","order_id":1}'

    def test_ensure_ascii(self) -> None:
        assert _compact.encode("é") == '"é"'
        assert StructuredEncoder(EncoderOptions(ensure_ascii=True)).encode("é") == '"\\u00e9"'

    def test_field_hook_sees_every_field(self) -> None:
        seen: list[str] = []

        def hook(field: FieldDescriptor, value: Any) -> Any:
            seen.append(field.name)
            return "x" if field.name == "customer_name" else value

        result = _compact.encode(Order(1, "Ann"), field_hook=hook)
        assert seen == ["order_id", "customer_name", "color"]
        assert result == '{"order_id":1,"customer_name":"x","color":"RED"}'

    def test_hook_replacement_is_encoded_recursively(self) -> None:
        def hook(field: FieldDescriptor, value: Any) -> Any:
            return Order(2, "Bob") if field.name == "children" else value

        assert _compact.to_primitive(Node(), field_hook=hook) == {
            "children": {"order_id": 2, "customer_name": "Bob", "color": "RED"}
        }

    def test_options_exposed(self) -> None:
        options = EncoderOptions(indent=4)
        assert StructuredEncoder(options).options is options
