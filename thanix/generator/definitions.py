"""
Intermediate definitions handed to the templates.

The emitters turn schema nodes and operations into these plain records;
the Jinja2 templates turn the records into Rust source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from thanix.generator.type_resolver import is_optional
from thanix.utils.string_case import rust_identifier

STRUCT_DERIVES: Final = "Serialize, Deserialize, Debug, Default, Clone"
ENUM_DERIVES: Final = "Debug"

SERDE_DEFAULT: Final = "#[serde(default)]"
SERDE_SKIP_NONE: Final = '#[serde(skip_serializing_if = "Option::is_none")]'


@dataclass(frozen=True)
class RustField:
    """One named field of a generated struct."""

    name: str
    rust_name: str
    rust_type: str
    description: str | None = None
    attributes: tuple[str, ...] = ()


def rust_field(
    name: str,
    rust_type: str,
    description: str | None = None,
    attributes: tuple[str, ...] = (),
) -> RustField:
    """Build a struct field for a JSON key.

    A ``serde(rename)`` attribute is added when the key is not usable as a
    Rust identifier as is. Raw identifiers (``r#type``) need no rename.

    Args:
        name: The JSON key.
        rust_type: The resolved Rust type.
        description: Optional doc comment text.
        attributes: Extra attributes placed after the rename.

    Returns:
        The field record.
    """
    rust_name = rust_identifier(name)
    # serde strips the r# prefix of raw identifiers
    if rust_name.removeprefix("r#") != name:
        attributes = (f'#[serde(rename = "{name}")]', *attributes)
    return RustField(
        name=name,
        rust_name=rust_name,
        rust_type=rust_type,
        description=description,
        attributes=attributes,
    )


@dataclass(frozen=True)
class StructDefinition:
    """A struct with named fields, generated from an object schema."""

    name: str
    fields: tuple[RustField, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class TupleStructDefinition:
    """A single-field wrapper, generated from an array schema."""

    name: str
    rust_type: str
    description: str | None = None


@dataclass(frozen=True)
class TypeAliasDefinition:
    """A type alias for components that are neither objects nor arrays."""

    name: str
    rust_type: str
    description: str | None = None


@dataclass(frozen=True)
class HeaderArgument:
    """A header parameter passed as an extra function argument."""

    name: str
    rust_name: str
    rust_type: str

    @property
    def optional(self) -> bool:
        return is_optional(self.rust_type)


@dataclass(frozen=True)
class ResponseVariant:
    status: int
    rust_type: str

    @property
    def variant_name(self) -> str:
        return f"Http{self.status}"


@dataclass(frozen=True)
class OperationBinding:
    """Everything needed to render one request function."""

    function_name: str
    method: str
    path: str
    response_enum_name: str
    url_expression: str
    description: str | None = None
    query_struct_name: str | None = None
    query_fields: tuple[RustField, ...] = ()
    body_type: str | None = None
    path_arguments: tuple[tuple[str, str], ...] = ()
    header_arguments: tuple[HeaderArgument, ...] = ()
    response_variants: tuple[ResponseVariant, ...] = ()
    arguments: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        arguments: list[str] = []
        if self.query_struct_name:
            arguments.append(f"query: {self.query_struct_name}")
        if self.body_type:
            arguments.append(f"body: {self.body_type}")
        arguments.extend(f"{rust_name}: {rust_type}" for rust_name, rust_type in self.path_arguments)
        arguments.extend(f"{header.rust_name}: {header.rust_type}" for header in self.header_arguments)
        object.__setattr__(self, "arguments", tuple(arguments))

    @property
    def has_query(self) -> bool:
        return self.query_struct_name is not None
