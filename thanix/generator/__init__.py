"""
Rust Code Generator Module

This module turns the parsed OpenAPI object model into Rust source through
Jinja2 templates.
"""

from .config import GeneratorConfig
from .operation_emitter import OperationEmitter
from .struct_emitter import StructEmitter
from .template_engine import RustCodeGenerator, RustTemplateEngine
from .type_resolver import TypeResolver

__all__ = [
    "GeneratorConfig",
    "OperationEmitter",
    "RustCodeGenerator",
    "RustTemplateEngine",
    "StructEmitter",
    "TypeResolver",
]
