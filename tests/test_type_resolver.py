"""Tests for the mapping of schema nodes to Rust types."""

from __future__ import annotations

from typing import Any

import pytest

from thanix.generator.type_resolver import (
    TypeResolver,
    is_optional,
    reference_name,
    rust_optional,
    select_integer_type,
)
from thanix.parser.oas_parser import SchemaError, parse_schema_node


def resolve(schema: dict[str, Any], *, infer_integer_width: bool = True) -> str:
    return TypeResolver(infer_integer_width=infer_integer_width).resolve(parse_schema_node(schema))


class TestPrimitives:
    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            ({"type": "string"}, "String"),
            ({"type": "string", "format": "date-time"}, "String"),
            ({"type": "string", "format": "uri"}, "String"),
            ({"type": "number"}, "f64"),
            ({"type": "number", "format": "float"}, "f64"),
            ({"type": "boolean"}, "bool"),
            ({"type": "integer"}, "i64"),
        ],
    )
    def test_primitive_types(self, schema: dict[str, Any], expected: str) -> None:
        assert resolve(schema) == expected

    def test_free_form_object_is_optional_map(self) -> None:
        assert resolve({"type": "object"}) == "Option<std::collections::HashMap<String, serde_json::Value>>"

    def test_object_with_properties_is_still_a_map(self) -> None:
        schema = {"type": "object", "properties": {"a": {"type": "string"}}}
        assert resolve(schema) == "Option<std::collections::HashMap<String, serde_json::Value>>"

    @pytest.mark.parametrize("keyword", ["oneOf", "anyOf"])
    def test_unhandled_kinds_fall_back_to_json_value(self, keyword: str) -> None:
        schema = {keyword: [{"type": "string"}, {"type": "integer"}]}
        assert resolve(schema) == "serde_json::Value"

    def test_untyped_schema_is_json_value(self) -> None:
        assert resolve({"description": "anything"}) == "serde_json::Value"

    def test_resolution_is_deterministic(self) -> None:
        node = parse_schema_node({"type": "array", "items": {"type": "integer", "maximum": 300}})
        resolver = TypeResolver()
        assert resolver.resolve(node) == resolver.resolve(node) == "Vec<i16>"


class TestReferences:
    def test_reference_strips_prefix(self) -> None:
        assert resolve({"$ref": "#/components/schemas/Device"}) == "Device"

    @pytest.mark.parametrize("name", ["X", "WritableInterfaceRequest", "Nested_Name"])
    def test_reference_round_trip(self, name: str) -> None:
        assert reference_name(f"#/components/schemas/{name}") == name

    def test_foreign_reference_is_rejected(self) -> None:
        with pytest.raises(SchemaError, match="Unsupported schema reference"):
            resolve({"$ref": "#/definitions/Device"})

    def test_reference_ignores_nullable_siblings(self) -> None:
        # $ref nodes never carry inline data
        assert resolve({"$ref": "#/components/schemas/Device", "nullable": True}) == "Device"


class TestArraysAndAllOf:
    def test_array_of_integers(self) -> None:
        assert resolve({"type": "array", "items": {"type": "integer"}}) == "Vec<i64>"

    def test_nested_arrays(self) -> None:
        schema = {"type": "array", "items": {"type": "array", "items": {"type": "integer"}}}
        assert resolve(schema) == "Vec<Vec<i64>>"

    def test_array_of_references(self) -> None:
        schema = {"type": "array", "items": {"$ref": "#/components/schemas/Tag"}}
        assert resolve(schema) == "Vec<Tag>"

    def test_array_without_items_fails(self) -> None:
        with pytest.raises(SchemaError, match="items"):
            resolve({"type": "array"})

    def test_all_of_uses_first_member(self) -> None:
        schema = {"allOf": [{"$ref": "#/components/schemas/Site"}, {"$ref": "#/components/schemas/Other"}]}
        assert resolve(schema) == "Option<Site>"

    def test_empty_all_of_is_json_value(self) -> None:
        assert resolve({"allOf": []}) == "serde_json::Value"


class TestNullable:
    def test_nullable_wraps_once(self) -> None:
        assert resolve({"type": "string", "nullable": True}) == "Option<String>"

    def test_nullable_all_of_is_not_double_wrapped(self) -> None:
        schema = {"allOf": [{"$ref": "#/components/schemas/Site"}], "nullable": True}
        assert resolve(schema) == "Option<Site>"

    def test_nullable_object_is_not_double_wrapped(self) -> None:
        assert resolve({"type": "object", "nullable": True}).count("Option<") == 1

    def test_nullable_array_wraps_outside(self) -> None:
        schema = {"type": "array", "nullable": True, "items": {"type": "string", "nullable": True}}
        assert resolve(schema) == "Option<Vec<Option<String>>>"

    def test_openapi_31_null_type(self) -> None:
        assert resolve({"type": ["integer", "null"]}) == "Option<i64>"

    def test_rust_optional_is_idempotent(self) -> None:
        assert rust_optional(rust_optional("u8")) == "Option<u8>"
        assert is_optional("Option<u8>")
        assert not is_optional("Vec<Option<u8>>")


class TestIntegerWidths:
    @pytest.mark.parametrize(
        ("minimum", "maximum", "expected"),
        [
            (0, 255, "u8"),
            (0, 256, "u16"),
            (0, 65535, "u16"),
            (0, 65536, "u32"),
            (0, 4294967295, "u32"),
            (0, 4294967296, "u64"),
            (0, 2**70, "u64"),
            (-1, 127, "i8"),
            (-1, 128, "i16"),
            (-1, 32767, "i16"),
            (-1, 2147483647, "i32"),
            (-1, 2147483648, "i64"),
            (-128, 0, "i8"),
            (-129, 0, "i16"),
            (-1000, 10, "i16"),
            (-32769, 1, "i32"),
            (-(2**40), 5, "i64"),
            (None, 100, "i8"),
            (None, 255, "i16"),
            (0, None, "i64"),
            (-5, None, "i64"),
            (None, None, "i64"),
        ],
    )
    def test_select_integer_type(self, minimum: int | None, maximum: int | None, expected: str) -> None:
        assert select_integer_type(minimum, maximum) == expected

    def test_bounds_come_from_schema(self) -> None:
        assert resolve({"type": "integer", "minimum": 0, "maximum": 32767}) == "u16"

    def test_nullable_bounded_integer(self) -> None:
        assert resolve({"type": "integer", "minimum": 1, "maximum": 50, "nullable": True}) == "Option<u8>"

    def test_negative_minimum_widens_signed_type(self) -> None:
        assert resolve({"type": "integer", "minimum": -1000, "maximum": 10}) == "i16"

    def test_simple_policy_ignores_bounds(self) -> None:
        schema = {"type": "integer", "minimum": 0, "maximum": 255}
        assert resolve(schema, infer_integer_width=False) == "i64"
