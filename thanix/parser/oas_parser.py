"""
OpenAPI Specification Parser for Rust Client Generation.

This module reads OpenAPI 3.x YAML documents into a small immutable object
model: schema nodes, path items, operations, parameters and responses.
Everything the emitters need is resolved here so that the rest of the
pipeline never touches raw dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

# HTTP methods in the order operations are emitted
HTTP_METHODS: Final = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

PARAMETER_LOCATIONS: Final = frozenset({"query", "header", "path", "cookie"})

SCHEMA_REF_PREFIX: Final = "#/components/schemas/"

_PRIMITIVE_TYPES: Final = frozenset({"string", "number", "integer", "boolean", "object", "array"})
_COMPOSITION_KEYWORDS: Final = ("oneOf", "anyOf", "not")

# Component sections whose references are resolved while parsing
_COMPONENT_SECTIONS: Final = {
    "parameters": "#/components/parameters/",
    "requestBodies": "#/components/requestBodies/",
    "responses": "#/components/responses/",
}


class SchemaError(ValueError):
    """Raised when the document cannot be turned into a client."""


@dataclass(frozen=True)
class SchemaData:
    """Data shared by every schema kind."""

    nullable: bool = False
    description: str | None = None


@dataclass(frozen=True)
class StringType:
    format: str | None = None
    enum: tuple[Any, ...] = ()


@dataclass(frozen=True)
class NumberType:
    format: str | None = None


@dataclass(frozen=True)
class IntegerType:
    format: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None


@dataclass(frozen=True)
class BooleanType:
    pass


@dataclass(frozen=True)
class ObjectType:
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ArrayType:
    items: SchemaNode | None = None


@dataclass(frozen=True)
class AllOfType:
    members: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True)
class AnyType:
    """A schema with no usable ``type``: oneOf, anyOf, not, or untyped."""

    keyword: str = "any"


SchemaKind = StringType | NumberType | IntegerType | BooleanType | ObjectType | ArrayType | AllOfType | AnyType


@dataclass(frozen=True)
class Reference:
    """A ``$ref`` pointer. Never carries inline type data."""

    ref: str


@dataclass(frozen=True)
class Schema:
    kind: SchemaKind
    data: SchemaData = field(default_factory=SchemaData)


SchemaNode = Reference | Schema


@dataclass(frozen=True)
class MediaType:
    schema: SchemaNode | None = None


@dataclass(frozen=True)
class Parameter:
    """Represents an OpenAPI parameter.

    ``schema`` is ``None`` for content-based parameters.
    """

    name: str
    location: str
    schema: SchemaNode | None = None
    description: str | None = None
    required: bool = False


@dataclass(frozen=True)
class RequestBody:
    content: dict[str, MediaType] = field(default_factory=dict)
    required: bool = False


@dataclass(frozen=True)
class Response:
    description: str = ""
    content: dict[str, MediaType] = field(default_factory=dict)


@dataclass(frozen=True)
class Operation:
    """Represents an OpenAPI operation."""

    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    parameters: tuple[Parameter, ...] = ()
    request_body: RequestBody | None = None
    responses: dict[str, Response] = field(default_factory=dict)


@dataclass(frozen=True)
class PathItem:
    """Operations of one path, keyed by lowercase HTTP method."""

    operations: dict[str, Operation] = field(default_factory=dict)

    def iter_operations(self) -> list[tuple[str, Operation]]:
        """Present operations in the fixed method order."""
        return [(method, self.operations[method]) for method in HTTP_METHODS if method in self.operations]


@dataclass(frozen=True)
class OpenAPIDocument:
    """Represents a parsed OpenAPI specification."""

    title: str
    version: str
    paths: dict[str, PathItem]
    schemas: dict[str, SchemaNode]


def _expect_mapping(value: Any, where: str) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(value, dict):
        msg = f"Expected a mapping at {where}, got {type(value).__name__}"
        raise SchemaError(msg)
    return value


def parse_schema_node(data: Any, where: str = "schema") -> SchemaNode:  # noqa: ANN401
    """Build a schema node from its YAML mapping.

    Args:
        data: The raw schema mapping.
        where: Location used in error messages.

    Returns:
        A ``Reference`` or a ``Schema``.

    Raises:
        SchemaError: If the mapping is malformed or uses an unknown ``type``.
    """
    data = _expect_mapping(data, where)

    if "$ref" in data:
        return Reference(ref=str(data["$ref"]))

    nullable = bool(data.get("nullable", False))
    schema_type = data.get("type")

    # OpenAPI 3.1 spells nullability as a type list
    if isinstance(schema_type, list):
        types = [t for t in schema_type if t != "null"]
        nullable = nullable or len(types) != len(schema_type)
        if len(types) != 1:
            return Schema(kind=AnyType(keyword="type"), data=SchemaData(nullable, data.get("description")))
        schema_type = types[0]

    schema_data = SchemaData(nullable=nullable, description=data.get("description"))

    if schema_type is None:
        return Schema(kind=_parse_untyped_kind(data, where), data=schema_data)

    if schema_type not in _PRIMITIVE_TYPES:
        msg = f"Unsupported schema type {schema_type!r} at {where}"
        raise SchemaError(msg)

    return Schema(kind=_parse_typed_kind(schema_type, data, where), data=schema_data)


def _parse_untyped_kind(data: dict[str, Any], where: str) -> SchemaKind:
    if "allOf" in data:
        members = tuple(
            parse_schema_node(member, f"{where}.allOf[{index}]") for index, member in enumerate(data["allOf"] or [])
        )
        return AllOfType(members=members)

    for keyword in _COMPOSITION_KEYWORDS:
        if keyword in data:
            return AnyType(keyword=keyword)

    return AnyType()


def _parse_typed_kind(schema_type: str, data: dict[str, Any], where: str) -> SchemaKind:
    match schema_type:
        case "string":
            return StringType(format=data.get("format"), enum=tuple(data.get("enum") or ()))
        case "number":
            return NumberType(format=data.get("format"))
        case "integer":
            return IntegerType(
                format=data.get("format"),
                minimum=data.get("minimum"),
                maximum=data.get("maximum"),
            )
        case "boolean":
            return BooleanType()
        case "array":
            items = data.get("items")
            return ArrayType(items=parse_schema_node(items, f"{where}.items") if items is not None else None)
        case _:
            properties = {
                name: parse_schema_node(prop, f"{where}.properties.{name}")
                for name, prop in (data.get("properties") or {}).items()
            }
            return ObjectType(properties=properties, required=frozenset(data.get("required") or ()))


class OASParser:
    """Parser for OpenAPI 3.x specifications."""

    def __init__(self) -> None:
        self.spec_data: dict[str, Any] | None = None

    def parse_file(self, file_path: str | Path) -> OpenAPIDocument:
        """Parse OpenAPI specification from a YAML (or JSON) file."""
        path = Path(file_path)
        text = path.read_text(encoding="utf-8")
        return self.parse_dict(yaml.safe_load(text))

    def parse_dict(self, spec_dict: Any) -> OpenAPIDocument:  # noqa: ANN401
        """Parse OpenAPI specification from dictionary."""
        self.spec_data = _expect_mapping(spec_dict, "document root")
        return self._parse_spec()

    def _parse_spec(self) -> OpenAPIDocument:
        """Parse the loaded specification."""
        if not self.spec_data:
            msg = "No specification data loaded"
            raise SchemaError(msg)

        version = str(self.spec_data.get("openapi", ""))
        if not version.startswith("3."):
            msg = f"Only OpenAPI 3.x documents are supported (got openapi: {version or 'missing'!r})"
            raise SchemaError(msg)

        if "paths" not in self.spec_data:
            msg = "Document has no 'paths' mapping"
            raise SchemaError(msg)
        components = _expect_mapping(self.spec_data.get("components"), "components")
        if "schemas" not in components:
            msg = "Document has no 'components.schemas' mapping"
            raise SchemaError(msg)

        info = self.spec_data.get("info") or {}
        return OpenAPIDocument(
            title=str(info.get("title", "")),
            version=str(info.get("version", "")),
            paths=self._parse_paths(),
            schemas=self._parse_schemas(components),
        )

    def _parse_schemas(self, components: dict[str, Any]) -> dict[str, SchemaNode]:
        """Parse all component schemas, keeping document order."""
        schemas = _expect_mapping(components["schemas"] or {}, "components.schemas")
        return {
            name: parse_schema_node(schema_data, f"components.schemas.{name}") for name, schema_data in schemas.items()
        }

    def _parse_paths(self) -> dict[str, PathItem]:
        """Parse all path items, keeping document order."""
        paths = _expect_mapping(self.spec_data["paths"] or {}, "paths")  # type: ignore[index]
        return {path: self._parse_path_item(path, path_data) for path, path_data in paths.items()}

    def _parse_path_item(self, path: str, path_data: Any) -> PathItem:  # noqa: ANN401
        path_data = _expect_mapping(path_data, f"paths.{path}")
        shared_parameters = self._parse_parameters(path_data.get("parameters") or [], f"paths.{path}")

        operations = {}
        for method in HTTP_METHODS:
            if method in path_data:
                operations[method] = self._parse_operation(
                    path_data[method],
                    shared_parameters,
                    f"paths.{path}.{method}",
                )
        return PathItem(operations=operations)

    def _parse_operation(
        self,
        operation_data: Any,  # noqa: ANN401
        shared_parameters: list[Parameter],
        where: str,
    ) -> Operation:
        """Parse a single operation."""
        operation_data = _expect_mapping(operation_data, where)
        own_parameters = self._parse_parameters(operation_data.get("parameters") or [], where)

        # Operation-level parameters override path-level ones with the same name and location
        overridden = {(param.name, param.location) for param in own_parameters}
        parameters = [p for p in shared_parameters if (p.name, p.location) not in overridden] + own_parameters

        request_body = None
        if operation_data.get("requestBody") is not None:
            request_body = self._parse_request_body(operation_data["requestBody"], f"{where}.requestBody")

        responses = {
            str(status_code): self._parse_response(response_data, f"{where}.responses.{status_code}")
            for status_code, response_data in (operation_data.get("responses") or {}).items()
        }

        return Operation(
            operation_id=operation_data.get("operationId"),
            summary=operation_data.get("summary"),
            description=operation_data.get("description"),
            parameters=tuple(parameters),
            request_body=request_body,
            responses=responses,
        )

    def _parse_parameters(self, parameters_data: list[Any], where: str) -> list[Parameter]:
        return [
            self._parse_parameter(param_data, f"{where}.parameters[{index}]")
            for index, param_data in enumerate(parameters_data)
        ]

    def _parse_parameter(self, param_data: Any, where: str) -> Parameter:  # noqa: ANN401
        """Parse a parameter."""
        param_data = self._resolve_component(param_data, "parameters", where)

        name = param_data.get("name")
        location = param_data.get("in")
        if not name:
            msg = f"Parameter without a name at {where}"
            raise SchemaError(msg)
        if location not in PARAMETER_LOCATIONS:
            msg = f"Unknown parameter location {location!r} for {name!r} at {where}"
            raise SchemaError(msg)

        schema = None
        if "schema" in param_data:
            schema = parse_schema_node(param_data["schema"], f"{where}.schema")

        return Parameter(
            name=str(name),
            location=location,
            schema=schema,
            description=param_data.get("description"),
            required=bool(param_data.get("required", False)),
        )

    def _parse_request_body(self, body_data: Any, where: str) -> RequestBody:  # noqa: ANN401
        body_data = self._resolve_component(body_data, "requestBodies", where)
        return RequestBody(
            content=self._parse_content(body_data.get("content") or {}, where),
            required=bool(body_data.get("required", False)),
        )

    def _parse_response(self, response_data: Any, where: str) -> Response:  # noqa: ANN401
        """Parse a response."""
        response_data = self._resolve_component(response_data, "responses", where)
        return Response(
            description=response_data.get("description") or "",
            content=self._parse_content(response_data.get("content") or {}, where),
        )

    def _parse_content(self, content_data: Any, where: str) -> dict[str, MediaType]:  # noqa: ANN401
        content_data = _expect_mapping(content_data, f"{where}.content")
        content = {}
        for media_type, media_data in content_data.items():
            media_data = _expect_mapping(media_data or {}, f"{where}.content.{media_type}")
            schema = None
            if media_data.get("schema") is not None:
                schema = parse_schema_node(media_data["schema"], f"{where}.content.{media_type}.schema")
            content[media_type] = MediaType(schema=schema)
        return content

    def _resolve_component(self, data: Any, section: str, where: str) -> dict[str, Any]:  # noqa: ANN401
        """Resolve a ``$ref`` into ``components.<section>``, or return the mapping as is."""
        data = _expect_mapping(data, where)
        if "$ref" not in data:
            return data

        ref = str(data["$ref"])
        prefix = _COMPONENT_SECTIONS[section]
        components = (self.spec_data or {}).get("components") or {}
        target = (components.get(section) or {}).get(ref.removeprefix(prefix)) if ref.startswith(prefix) else None
        if target is None:
            msg = f"Cannot resolve reference {ref!r} at {where}"
            raise SchemaError(msg)
        return _expect_mapping(target, ref)
