"""Tests for the Jinja2 filters used by the Rust templates."""

from __future__ import annotations

import pytest

from thanix.generator.filters import (
    FILTERS,
    http_method_variant,
    rust_doc_comment,
    rust_format_template,
    rust_string_literal,
    sanitize_rust_string_literal,
)


class TestRustDocComment:
    def test_single_line(self) -> None:
        assert rust_doc_comment("Hello") == "/// Hello\n"

    def test_missing_description_gives_nothing(self) -> None:
        assert rust_doc_comment(None) == ""

    def test_empty_description_is_one_bare_line(self) -> None:
        assert rust_doc_comment("") == "///\n"
        assert rust_doc_comment("", 1) == "    ///\n"

    @pytest.mark.parametrize("line_count", [1, 2, 5, 12])
    def test_one_comment_line_per_input_line(self, line_count: int) -> None:
        text = "\n".join(f"line {index}" for index in range(line_count))
        result = rust_doc_comment(text)
        assert result.count("\n") == line_count
        assert all(line.startswith("/// ") for line in result.splitlines())

    def test_blank_lines_are_bare_markers(self) -> None:
        assert rust_doc_comment("First\n\nSecond") == "/// First\n///\n/// Second\n"

    def test_indentation_is_four_spaces_per_level(self) -> None:
        assert rust_doc_comment("Field", 1) == "    /// Field\n"
        assert rust_doc_comment("Field", 2) == "        /// Field\n"

    def test_carriage_returns_are_dropped(self) -> None:
        assert rust_doc_comment("One\r\nTwo") == "/// One\n/// Two\n"

    def test_trailing_newline_keeps_its_line(self) -> None:
        assert rust_doc_comment("Text\n") == "/// Text\n///\n"


class TestStringLiterals:
    def test_escapes_quotes_and_backslashes(self) -> None:
        assert sanitize_rust_string_literal('say "hi" \\ bye') == 'say \\"hi\\" \\\\ bye'

    def test_escapes_control_characters(self) -> None:
        assert sanitize_rust_string_literal("a\nb\tc") == "a\\nb\\tc"

    def test_literal_is_quoted(self) -> None:
        assert rust_string_literal("X-Request-Id") == '"X-Request-Id"'

    def test_empty_literal(self) -> None:
        assert rust_string_literal("") == '""'


class TestFormatTemplate:
    def test_path_without_placeholders(self) -> None:
        assert rust_format_template("/api/status/") == ("/api/status/", [])

    def test_placeholders_become_positional_slots(self) -> None:
        template, names = rust_format_template("/api/dcim/devices/{id}/")
        assert template == "/api/dcim/devices/{}/"
        assert names == ["id"]

    def test_placeholders_keep_their_order(self) -> None:
        template, names = rust_format_template("/sites/{site_id}/racks/{rack-id}")
        assert template == "/sites/{}/racks/{}"
        assert names == ["site_id", "rack-id"]

    def test_stray_braces_are_escaped(self) -> None:
        template, names = rust_format_template("/odd/}x{")
        assert template == "/odd/}}x{{"
        assert names == []


class TestHttpMethodVariant:
    @pytest.mark.parametrize("method", ["get", "put", "post", "delete", "options", "head", "patch", "trace"])
    def test_every_method_maps_to_a_constant(self, method: str) -> None:
        assert http_method_variant(method) == f"Method::{method.upper()}"


def test_filters_are_registered() -> None:
    assert set(FILTERS) == {"rust_doc_comment", "rust_string_literal", "http_method_variant"}
