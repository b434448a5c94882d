"""
Struct generation for component schemas.

Object schemas become structs with named fields, array schemas become
single-field tuple structs. Everything else is left to ``emit_alias``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from thanix.generator.definitions import (
    SERDE_DEFAULT,
    StructDefinition,
    TupleStructDefinition,
    TypeAliasDefinition,
    rust_field,
)
from thanix.generator.type_resolver import rust_optional
from thanix.parser.oas_parser import ArrayType, ObjectType, Schema, SchemaError, SchemaNode

if TYPE_CHECKING:
    from thanix.generator.config import GeneratorConfig
    from thanix.generator.template_engine import RustTemplateEngine
    from thanix.generator.type_resolver import TypeResolver

# The one field kept strict under the nullability workaround
_WORKAROUND_EXEMPT_FIELD = "id"


class StructEmitter:
    """Generates Rust structs from component schemas.

    When ``workaround_mode`` is enabled, structs whose name matches the
    configured list of unsanitary objects get every field except ``id``
    wrapped in ``Option``. NetBox sometimes returns ``null`` for fields its
    schema declares non-nullable, which would otherwise fail deserialization.
    The workaround weakens validation and is only meant for NetBox.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        resolver: TypeResolver,
        template_engine: RustTemplateEngine,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.template_engine = template_engine

    def emit(self, name: str, node: SchemaNode) -> str | None:
        """Render the struct for a component, or ``None`` if it is not struct-shaped."""
        definition = self.build(name, node)
        if definition is None:
            return None
        if isinstance(definition, TupleStructDefinition):
            return self.template_engine.render_template("types/tuple_struct.rs.j2", {"definition": definition})
        return self.template_engine.render_template("types/struct.rs.j2", {"definition": definition})

    def emit_alias(self, name: str, node: SchemaNode) -> str:
        """Render a type alias for a component that has no struct shape."""
        description = node.data.description if isinstance(node, Schema) else None
        definition = TypeAliasDefinition(name=name, rust_type=self.resolver.resolve(node), description=description)
        return self.template_engine.render_template("types/alias.rs.j2", {"definition": definition})

    def build(self, name: str, node: SchemaNode) -> StructDefinition | TupleStructDefinition | None:
        if not isinstance(node, Schema):
            return None

        match node.kind:
            case ObjectType() as obj:
                return self._build_struct(name, obj, node.data.description)
            case ArrayType(items=None):
                msg = f"Array component {name!r} has no 'items' declaration"
                raise SchemaError(msg)
            case ArrayType(items=items):
                element_description = items.data.description if isinstance(items, Schema) else None
                return TupleStructDefinition(
                    name=name,
                    rust_type=f"Vec<{self.resolver.resolve(items)}>",
                    description=element_description,
                )
            case _:
                return None

    def _build_struct(self, name: str, obj: ObjectType, description: str | None) -> StructDefinition:
        widen = self.config.needs_nullability_workaround(name)

        fields = []
        for prop_name, prop in obj.properties.items():
            try:
                rust_type = self.resolver.resolve(prop)
            except SchemaError as e:
                msg = f"{name}.{prop_name}: {e}"
                raise SchemaError(msg) from e

            if widen and prop_name != _WORKAROUND_EXEMPT_FIELD:
                rust_type = rust_optional(rust_type)

            attributes = () if prop_name in obj.required else (SERDE_DEFAULT,)
            prop_description = prop.data.description if isinstance(prop, Schema) else None
            fields.append(rust_field(prop_name, rust_type, prop_description, attributes))

        return StructDefinition(name=name, fields=tuple(fields), description=description)
