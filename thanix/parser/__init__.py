"""
OpenAPI Parser Module for Rust Client Generation

This module turns OpenAPI 3.x YAML documents into the object model the
emitters consume.
"""

from .oas_parser import (
    HTTP_METHODS,
    SCHEMA_REF_PREFIX,
    AllOfType,
    AnyType,
    ArrayType,
    BooleanType,
    IntegerType,
    MediaType,
    NumberType,
    OASParser,
    ObjectType,
    OpenAPIDocument,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
    SchemaData,
    SchemaError,
    SchemaKind,
    SchemaNode,
    StringType,
    parse_schema_node,
)

__all__ = [
    "HTTP_METHODS",
    "SCHEMA_REF_PREFIX",
    "AllOfType",
    "AnyType",
    "ArrayType",
    "BooleanType",
    "IntegerType",
    "MediaType",
    "NumberType",
    "OASParser",
    "ObjectType",
    "OpenAPIDocument",
    "Operation",
    "Parameter",
    "PathItem",
    "Reference",
    "RequestBody",
    "Response",
    "Schema",
    "SchemaData",
    "SchemaError",
    "SchemaKind",
    "SchemaNode",
    "StringType",
    "parse_schema_node",
]
