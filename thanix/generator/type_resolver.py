"""
Mapping of OpenAPI schema nodes to Rust type expressions.

The resolver is a pure function of its input: references become the name of
the referenced component, primitive kinds map to Rust primitives, and the
``nullable`` flag wraps the result in ``Option`` exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from thanix.parser.oas_parser import (
    SCHEMA_REF_PREFIX,
    AllOfType,
    ArrayType,
    BooleanType,
    IntegerType,
    NumberType,
    ObjectType,
    Reference,
    SchemaError,
    SchemaNode,
    StringType,
)

RUST_STRING: Final = "String"
RUST_FLOAT: Final = "f64"
RUST_DEFAULT_INTEGER: Final = "i64"
RUST_BOOL: Final = "bool"
RUST_JSON_VALUE: Final = "serde_json::Value"
RUST_JSON_MAP: Final = "std::collections::HashMap<String, serde_json::Value>"

_OPTION_PREFIX: Final = "Option<"

# (bits, signed max, unsigned max), smallest first
_INTEGER_WIDTHS: Final = tuple((bits, 2 ** (bits - 1) - 1, 2**bits - 1) for bits in (8, 16, 32, 64))


def is_optional(rust_type: str) -> bool:
    """Check if a Rust type expression is already an ``Option``."""
    return rust_type.startswith(_OPTION_PREFIX)


def rust_optional(rust_type: str) -> str:
    """Wrap Rust type in Option if not already optional."""
    return rust_type if is_optional(rust_type) else f"{_OPTION_PREFIX}{rust_type}>"


def rust_vec(rust_type: str) -> str:
    """Wrap Rust type in Vec."""
    return f"Vec<{rust_type}>"


def reference_name(ref: str) -> str:
    """Extract the component name from a schema reference.

    Args:
        ref: The ``$ref`` value, e.g. ``#/components/schemas/Device``.

    Returns:
        The component name, e.g. ``Device``.

    Raises:
        SchemaError: If the pointer does not target ``components.schemas``.
    """
    if not ref.startswith(SCHEMA_REF_PREFIX):
        msg = f"Unsupported schema reference {ref!r}: only {SCHEMA_REF_PREFIX}<Name> pointers are resolved"
        raise SchemaError(msg)
    return ref.removeprefix(SCHEMA_REF_PREFIX)


def select_integer_type(minimum: float | None, maximum: float | None) -> str:
    """Select the smallest Rust integer type that can hold the declared bounds.

    The sign comes from ``minimum`` (signed only when it is negative or
    absent). A signed type must hold both bounds, an unsigned one only
    ``maximum``. Without a ``maximum`` the default ``i64`` is used.

    Examples:
        >>> select_integer_type(0, 255)
        'u8'
        >>> select_integer_type(-1, 127)
        'i8'
        >>> select_integer_type(-1000, 10)
        'i16'
        >>> select_integer_type(0, None)
        'i64'
    """
    if maximum is None:
        return RUST_DEFAULT_INTEGER

    if minimum is not None and minimum >= 0:
        for bits, _, unsigned_max in _INTEGER_WIDTHS:
            if maximum <= unsigned_max:
                return f"u{bits}"
        return "u64"

    for bits, signed_max, _ in _INTEGER_WIDTHS:
        if maximum <= signed_max and (minimum is None or minimum >= -(signed_max + 1)):
            return f"i{bits}"
    return "i64"


@dataclass(frozen=True)
class TypeResolver:
    """Resolves schema nodes to Rust type strings."""

    infer_integer_width: bool = True

    def resolve(self, node: SchemaNode) -> str:
        """Convert a schema node to a Rust type string."""
        if isinstance(node, Reference):
            return reference_name(node.ref)

        rust_type = self._resolve_kind(node.kind)
        if node.data.nullable:
            rust_type = rust_optional(rust_type)
        return rust_type

    def _resolve_kind(self, kind: object) -> str:
        match kind:
            case StringType():
                return RUST_STRING
            case NumberType():
                return RUST_FLOAT
            case IntegerType(minimum=minimum, maximum=maximum):
                if not self.infer_integer_width:
                    return RUST_DEFAULT_INTEGER
                return select_integer_type(minimum, maximum)
            case BooleanType():
                return RUST_BOOL
            case ObjectType():
                # Free-form objects have no struct to map to
                return rust_optional(RUST_JSON_MAP)
            case ArrayType(items=None):
                msg = "Array schema without an 'items' declaration"
                raise SchemaError(msg)
            case ArrayType(items=items):
                return rust_vec(self.resolve(items))
            case AllOfType(members=members) if members:
                # Only the first member is used; allOf composition is not merged
                return rust_optional(self.resolve(members[0]))
            case _:
                return RUST_JSON_VALUE
