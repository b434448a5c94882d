"""
Jinja2 filters for Rust code generation.

This module provides the custom filters registered on the template
environment: doc comments, string literals and URL templates.
"""

from __future__ import annotations

import re
from typing import Final

INDENT: Final = "    "

_DOC_MARKER: Final = "///"
_PATH_PLACEHOLDER_PATTERN: Final = re.compile(r"\{([^{}]+)\}")


def rust_doc_comment(text: str | None, indent: int = 0) -> str:
    """Convert text to Rust doc comment lines.

    Every line of ``text`` becomes one ``///`` line, terminated by a newline,
    so ``k`` input lines always give ``k`` output lines. Blank lines are kept
    as a bare marker.

    Args:
        text: The text to convert, or ``None``.
        indent: Indentation level (in units of four spaces).

    Returns:
        Formatted doc comment, or ``""`` when there is no description at all.

    Example:
        >>> rust_doc_comment("First\\n\\nSecond", 1)
        '    /// First\\n    ///\\n    /// Second\\n'
    """
    if text is None:
        return ""

    prefix = INDENT * indent + _DOC_MARKER
    result: list[str] = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        result.append(f"{prefix} {line}\n" if line else f"{prefix}\n")
    return "".join(result)


def sanitize_rust_string_literal(text: str) -> str:
    """Sanitize text for use in Rust string literals.

    Args:
        text: Text to sanitize.

    Returns:
        Sanitized text safe for Rust string literals.
    """
    if not text:
        return ""

    escape_map = {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\t": "\\t",
    }

    result = text
    for char, escaped in escape_map.items():
        result = result.replace(char, escaped)

    return result


def rust_string_literal(text: str) -> str:
    """Format text as a quoted Rust string literal."""
    return f'"{sanitize_rust_string_literal(text)}"'


def rust_format_template(path: str) -> tuple[str, list[str]]:
    """Turn an OpenAPI path into a ``format!`` string with positional slots.

    Args:
        path: The OpenAPI path, e.g. ``/api/dcim/devices/{id}/``.

    Returns:
        The escaped format string with each ``{name}`` replaced by ``{}``,
        and the placeholder names in order of appearance.

    Example:
        >>> rust_format_template("/api/dcim/devices/{id}/")
        ('/api/dcim/devices/{}/', ['id'])
    """
    names: list[str] = []

    def replace_param(match: re.Match[str]) -> str:
        names.append(match.group(1))
        return "\0"

    template = _PATH_PLACEHOLDER_PATTERN.sub(replace_param, path)
    template = sanitize_rust_string_literal(template).replace("{", "{{").replace("}", "}}")
    return template.replace("\0", "{}"), names


def http_method_variant(method: str) -> str:
    """Convert an HTTP method name to its ``reqwest::Method`` constant.

    Example:
        >>> http_method_variant("get")
        'Method::GET'
    """
    return f"Method::{method.upper()}"


# Register filters that will be available in Jinja templates
FILTERS = {
    "rust_doc_comment": rust_doc_comment,
    "rust_string_literal": rust_string_literal,
    "http_method_variant": http_method_variant,
}
