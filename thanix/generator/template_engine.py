"""
Rust Template Engine for OpenAPI Client Generation

This module uses Jinja2 templates to generate the Rust client crate
from a parsed OpenAPI document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from thanix.generator.config import GeneratorConfig
from thanix.generator.definitions import ENUM_DERIVES, STRUCT_DERIVES
from thanix.generator.filters import FILTERS
from thanix.generator.operation_emitter import OperationEmitter
from thanix.generator.struct_emitter import StructEmitter
from thanix.generator.type_resolver import TypeResolver
from thanix.parser.oas_parser import OpenAPIDocument, SchemaError
from thanix.utils.file_utils import crate_name_for

DEFAULT_TITLE = "the API"


class RustTemplateEngine:
    """Template engine for generating Rust code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._register_filters()
        self._register_globals()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters for Rust code generation."""
        self.env.filters.update(FILTERS)

    def _register_globals(self) -> None:
        """Register global values available in templates."""
        self.env.globals.update(
            {
                "struct_derives": STRUCT_DERIVES,
                "enum_derives": ENUM_DERIVES,
            }
        )

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


class RustCodeGenerator:
    """Main code generator for Rust clients.

    Walks ``components.schemas`` and ``paths`` once, in document order, and
    returns the whole crate as a mapping of file path to content. Nothing is
    written to disk here.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        template_engine: RustTemplateEngine | None = None,
    ) -> None:
        """Initialize the code generator."""
        self.config = config or GeneratorConfig()
        self.template_engine = template_engine or RustTemplateEngine()
        self.resolver = TypeResolver(infer_integer_width=self.config.infer_integer_width)
        self.struct_emitter = StructEmitter(self.config, self.resolver, self.template_engine)
        self.operation_emitter = OperationEmitter(self.config, self.resolver, self.template_engine)
        self.skipped_schemas: list[str] = []

    @property
    def skipped_parameters(self) -> list[str]:
        return self.operation_emitter.skipped_parameters

    def generate_client(self, spec: OpenAPIDocument, output_dir: Path) -> dict[Path, str]:
        """Generate complete Rust client from OpenAPI spec."""
        output_dir = Path(output_dir)
        context = {
            "spec": spec,
            "title": spec.title or DEFAULT_TITLE,
            "version": spec.version,
            "crate_name": crate_name_for(output_dir),
            "workaround_mode": self.config.workaround_mode,
            "unsanitary_objects": self.config.unsanitary_objects,
            "debug": self.config.debug,
        }

        files = {}
        files.update(self._generate_type_files(spec, context, output_dir))
        files.update(self._generate_path_files(spec, context, output_dir))
        files.update(self._generate_base_files(context, output_dir))
        files.update(self._generate_project_files(context, output_dir))

        return files

    def generate_types(self, spec: OpenAPIDocument, context: dict[str, Any]) -> str:
        """Build the types buffer: header plus one definition per component."""
        buffer = [self.template_engine.render_template("types/header.rs.j2", context)]
        for name, schema in spec.schemas.items():
            try:
                structure = self.struct_emitter.emit(name, schema)
                if structure is None:
                    self.skipped_schemas.append(name)
                    structure = self.struct_emitter.emit_alias(name, schema)
            except SchemaError as e:
                msg = f"components.schemas.{name}: {e}"
                raise SchemaError(msg) from e
            buffer.append(structure)
        return "\n".join(buffer)

    def generate_paths(self, spec: OpenAPIDocument, context: dict[str, Any]) -> str:
        """Build the paths buffer: usings plus every operation binding."""
        buffer = [self.template_engine.render_template("paths/header.rs.j2", context)]
        for path, path_item in spec.paths.items():
            try:
                bindings = self.operation_emitter.emit(path, path_item)
            except SchemaError as e:
                msg = f"paths.{path}: {e}"
                raise SchemaError(msg) from e
            if bindings:
                buffer.append(bindings)
        return "\n".join(buffer)

    def _generate_type_files(
        self,
        spec: OpenAPIDocument,
        context: dict[str, Any],
        output_dir: Path,
    ) -> dict[Path, str]:
        return {output_dir / "src" / "types.rs": self.generate_types(spec, context)}

    def _generate_path_files(
        self,
        spec: OpenAPIDocument,
        context: dict[str, Any],
        output_dir: Path,
    ) -> dict[Path, str]:
        return {output_dir / "src" / "paths.rs": self.generate_paths(spec, context)}

    def _generate_base_files(self, context: dict[str, Any], output_dir: Path) -> dict[Path, str]:
        """Generate base library files."""
        src_dir = output_dir / "src"
        return {
            src_dir / "lib.rs": self.template_engine.render_template("base/lib.rs.j2", context),
            src_dir / "util.rs": self.template_engine.render_template("base/util.rs.j2", context),
        }

    def _generate_project_files(self, context: dict[str, Any], output_dir: Path) -> dict[Path, str]:
        """Generate project configuration files."""
        return {
            output_dir / "Cargo.toml": self.template_engine.render_template("base/Cargo.toml.j2", context),
            output_dir / "build.rs": self.template_engine.render_template("base/build.rs.j2", context),
            output_dir / "README.md": self.template_engine.render_template("base/README.md.j2", context),
        }
