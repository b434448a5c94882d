"""
thanix

A Jinja2-based generator that produces Rust API clients from OpenAPI v3
YAML schemas, built around NetBox's REST API.
"""

from .generator import GeneratorConfig, RustCodeGenerator, RustTemplateEngine
from .parser import OASParser, OpenAPIDocument, SchemaError

__version__ = "1.0.0"

__all__ = [
    "GeneratorConfig",
    "OASParser",
    "OpenAPIDocument",
    "RustCodeGenerator",
    "RustTemplateEngine",
    "SchemaError",
]
