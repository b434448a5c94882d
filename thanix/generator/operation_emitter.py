"""
Request function generation for path items.

Each operation of a path item becomes one Rust function, preceded by its
optional query struct and its response enum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from thanix.generator.definitions import (
    SERDE_SKIP_NONE,
    HeaderArgument,
    OperationBinding,
    ResponseVariant,
    RustField,
    rust_field,
)
from thanix.generator.filters import rust_format_template
from thanix.generator.type_resolver import rust_optional
from thanix.parser.oas_parser import Operation, Parameter, PathItem, SchemaError
from thanix.utils.string_case import (
    normalize_rust_identifier,
    rust_identifier,
    rust_pascal_case,
    rust_snake_case,
    underscore_join,
)

if TYPE_CHECKING:
    from thanix.generator.config import GeneratorConfig
    from thanix.generator.template_engine import RustTemplateEngine
    from thanix.generator.type_resolver import TypeResolver

JSON_MEDIA_TYPE: Final = "application/json"
QUERY_STRUCT_SUFFIX: Final = "Query"
RESPONSE_ENUM_SUFFIX: Final = "Response"
HEADER_ARGUMENT_PREFIX: Final = "header_"


def response_sort_key(status_code: str) -> tuple[int, int | str]:
    """Order status codes numerically, non-numeric keys last."""
    return (0, int(status_code)) if status_code.isdigit() else (1, status_code)


class OperationEmitter:
    """Generates request functions for every operation of a path item.

    Content-based parameters cannot be typed and are skipped; each skip is
    recorded in ``skipped_parameters``. Cookie parameters are rejected.
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
        self.skipped_parameters: list[str] = []

    def emit(self, path: str, path_item: PathItem) -> str:
        """Render all operations of a path item, in method order."""
        return "\n".join(
            self.render(self.build(path, method, operation)) for method, operation in path_item.iter_operations()
        )

    def render(self, binding: OperationBinding) -> str:
        return self.template_engine.render_template(
            "paths/operation.rs.j2",
            {"op": binding, "debug": self.config.debug},
        )

    def function_name(self, path: str, method: str, operation: Operation) -> str:
        """Use the operation id, or derive a name from the path and method.

        Example:
            ``/api/dcim/devices/{id}/`` with ``get`` gives ``dcim_devices_id_get``.
        """
        if operation.operation_id:
            return operation.operation_id
        stem = underscore_join(path.removeprefix(self.config.api_root))
        return f"{stem}_{method}" if stem else method

    def build(self, path: str, method: str, operation: Operation) -> OperationBinding:
        """Collect the signature, query struct and responses of one operation."""
        name = self.function_name(path, method, operation)
        type_prefix = rust_pascal_case(normalize_rust_identifier(name))

        query_fields: list[RustField] = []
        path_arguments: list[tuple[str, str]] = []
        path_names: set[str] = set()
        header_arguments: list[HeaderArgument] = []

        for param in operation.parameters:
            if param.schema is None:
                self.skipped_parameters.append(f"{name}: {param.location} parameter {param.name!r} has no schema")
                continue

            match param.location:
                case "query":
                    query_fields.append(self._query_field(name, param))
                case "header":
                    header_arguments.append(
                        HeaderArgument(
                            name=param.name,
                            rust_name=HEADER_ARGUMENT_PREFIX + normalize_rust_identifier(rust_snake_case(param.name)),
                            rust_type=self._resolve(name, param),
                        )
                    )
                case "path":
                    path_arguments.append((rust_identifier(param.name), self._resolve(name, param)))
                    path_names.add(param.name)
                case _:
                    msg = f"{name}: {param.location} parameter {param.name!r} is not supported"
                    raise SchemaError(msg)

        query_struct_name = f"{type_prefix}{QUERY_STRUCT_SUFFIX}" if query_fields else None

        return OperationBinding(
            function_name=rust_identifier(name),
            method=method,
            path=path,
            response_enum_name=f"{type_prefix}{RESPONSE_ENUM_SUFFIX}",
            url_expression=self._url_expression(name, path, path_names, has_query=bool(query_fields)),
            description=operation.description,
            query_struct_name=query_struct_name,
            query_fields=tuple(query_fields),
            body_type=self._request_body_type(name, operation),
            path_arguments=tuple(path_arguments),
            header_arguments=tuple(header_arguments),
            response_variants=self._response_variants(name, operation),
        )

    def _resolve(self, name: str, param: Parameter) -> str:
        try:
            return self.resolver.resolve(param.schema)  # type: ignore[arg-type]
        except SchemaError as e:
            msg = f"{name}: parameter {param.name!r}: {e}"
            raise SchemaError(msg) from e

    def _query_field(self, name: str, param: Parameter) -> RustField:
        # Every query field is optional; absent ones are left out of the query string
        return rust_field(
            param.name,
            rust_optional(self._resolve(name, param)),
            param.description,
            (SERDE_SKIP_NONE,),
        )

    def _request_body_type(self, name: str, operation: Operation) -> str | None:
        if operation.request_body is None:
            return None
        media = operation.request_body.content.get(JSON_MEDIA_TYPE)
        if media is None or media.schema is None:
            return None
        try:
            return self.resolver.resolve(media.schema)
        except SchemaError as e:
            msg = f"{name}: request body: {e}"
            raise SchemaError(msg) from e

    def _response_variants(self, name: str, operation: Operation) -> tuple[ResponseVariant, ...]:
        variants = []
        for status_code in sorted(operation.responses, key=response_sort_key):
            # default, 2XX and friends fall through to the catch-all variant
            if not status_code.isdigit():
                continue
            media = operation.responses[status_code].content.get(JSON_MEDIA_TYPE)
            if media is None or media.schema is None:
                continue
            try:
                rust_type = self.resolver.resolve(media.schema)
            except SchemaError as e:
                msg = f"{name}: response {status_code}: {e}"
                raise SchemaError(msg) from e
            variants.append(ResponseVariant(status=int(status_code), rust_type=rust_type))
        return tuple(variants)

    def _url_expression(self, name: str, path: str, path_names: set[str], *, has_query: bool) -> str:
        template, placeholders = rust_format_template(path)
        for placeholder in placeholders:
            if placeholder not in path_names:
                msg = f"{name}: placeholder {{{placeholder}}} in {path!r} has no typed path parameter"
                raise SchemaError(msg)
        arguments = ["state.base_url", *(rust_identifier(placeholder) for placeholder in placeholders)]
        if has_query:
            template += "?{}"
            arguments.append("qstring_clean")
        return f'format!("{{}}{template}", {", ".join(arguments)})'
