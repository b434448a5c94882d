"""
Identifier helpers for the generated Rust code.

OpenAPI names (operation ids, property names, path segments, header names)
are free-form strings; these functions turn them into Rust identifiers and
type names.

Case conversion is based on https://github.com/okunishinishi/python-stringcase
"""

import re
from collections.abc import Callable
from typing import Final

_CASE_DELIMITER_PATTERN: Final = re.compile(r"[\-\.\s]")
_ACRONYM_PATTERN: Final = re.compile(r"([A-Z])([A-Z][a-z])")
_LOWER_UPPER_PATTERN: Final = re.compile(r"([a-z0-9])([A-Z])")
_INVALID_IDENTIFIER_CHAR_PATTERN: Final = re.compile(r"[^a-zA-Z0-9_]")
_SEPARATOR_RUN_PATTERN: Final = re.compile(r"[^a-zA-Z0-9]+")

# Strict, weak and reserved keywords of the 2024 edition; usable as r#name
RUST_KEYWORDS: Final = frozenset(
    """
    as break const continue else enum extern false fn for if impl in let loop
    match mod move mut pub ref return static struct trait true type unsafe use
    where while async await dyn union try abstract become box do final gen
    macro override priv typeof unsized virtual yield
    """.split()
)

# Not allowed even as raw identifiers
_SUFFIXED_KEYWORDS: Final = frozenset({"crate", "self", "Self", "super"})


def _unless_empty(string: str | None, convert: Callable[[str], str]) -> str:
    return convert(string) if string else ""


def snakecase(string: str | None) -> str:
    """Convert a name into snake_case, splitting camelCase and acronyms.

    Examples:
        >>> snakecase("getHTTPResponse")
        'get_http_response'
        >>> snakecase("X-Request-Id")
        'x_request_id'
    """

    def _convert(s: str) -> str:
        s = _CASE_DELIMITER_PATTERN.sub("_", s)
        s = _ACRONYM_PATTERN.sub(r"\1_\2", s)
        return _LOWER_UPPER_PATTERN.sub(r"\1_\2", s).lower()

    return _unless_empty(string, _convert)


def pascalcase(string: str | None) -> str:
    """Convert a name into PascalCase.

    Examples:
        >>> pascalcase("dcim_devices_list")
        'DcimDevicesList'
    """
    return _unless_empty(string, lambda s: "".join(word.capitalize() for word in snakecase(s).split("_")))


rust_snake_case = snakecase
rust_pascal_case = pascalcase


def normalize_rust_identifier(name: str | None) -> str:
    """Replace characters Rust rejects in identifiers and guard a leading digit.

    Examples:
        >>> normalize_rust_identifier("site-id")
        'site_id'
        >>> normalize_rust_identifier("1st")
        '_1st'
    """

    def _convert(s: str) -> str:
        normalized = _INVALID_IDENTIFIER_CHAR_PATTERN.sub("_", s)
        return f"_{normalized}" if normalized[0].isdigit() else normalized

    return _unless_empty(name, _convert)


def underscore_join(string: str | None) -> str:
    """Collapse every run of non-alphanumeric characters into one underscore.

    Examples:
        >>> underscore_join("dcim/devices/{id}/")
        'dcim_devices_id'
    """
    return _unless_empty(string, lambda s: _SEPARATOR_RUN_PATTERN.sub("_", s).strip("_"))


def escape_rust_keyword(name: str) -> str:
    """Escape a keyword as a raw identifier, or suffix it when raw is not allowed.

    Examples:
        >>> escape_rust_keyword("type")
        'r#type'
        >>> escape_rust_keyword("self")
        'self_'
    """
    if name in _SUFFIXED_KEYWORDS:
        return f"{name}_"
    return f"r#{name}" if name in RUST_KEYWORDS else name


def rust_identifier(name: str) -> str:
    """Turn an arbitrary OpenAPI name into a usable Rust identifier."""
    return escape_rust_keyword(normalize_rust_identifier(name))
