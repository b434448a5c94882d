#!/usr/bin/env python3
"""Command-line interface for the thanix Rust client generator."""

import argparse
import contextlib
import shutil
import sys
import tempfile
import traceback
from collections.abc import Generator
from pathlib import Path

import yaml

from thanix.generator.config import DEFAULT_API_ROOT, DEFAULT_UNSANITARY_OBJECTS, GeneratorConfig
from thanix.generator.template_engine import RustCodeGenerator
from thanix.parser.oas_parser import OASParser, SchemaError
from thanix.utils.file_utils import GENERATED_ENTRIES, clean_output_directory, write_files_to_disk

# Exit codes for better error reporting
EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_YAML = 2
EXIT_INVALID_SCHEMA = 3
EXIT_GENERATION_ERROR = 4


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="thanix",
        description="Generate a Rust API client crate from an OpenAPI v3 YAML schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --input-file netbox.yaml
  %(prog)s --input-file netbox.yaml --output ./netbox-client --workaround
  %(prog)s -i netbox.yaml -u interface -u vminterface --workaround --debug
        """,
    )
    parser.add_argument(
        "--input-file",
        "-i",
        type=Path,
        help="Path to a YAML schema file",
        dest="input_file",
        metavar="INPUT_FILE",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("output"),
        help="Output directory; its name is used as the crate name (default: %(default)s)",
        dest="output_dir",
    )
    parser.add_argument(
        "--workaround",
        "-w",
        action="store_true",
        help="Make all fields of unsanitary objects (except 'id') optional",
        dest="workaround_mode",
    )
    parser.add_argument(
        "--unsanitary",
        "-u",
        action="append",
        help=(
            "Object name substring treated as unsanitary in workaround mode; repeatable "
            f"(default: {', '.join(DEFAULT_UNSANITARY_OBJECTS)})"
        ),
        dest="unsanitary_objects",
        metavar="NAME",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Make the generated functions print each request and response to stderr",
    )
    parser.add_argument(
        "--simple-integers",
        action="store_true",
        help="Map every integer to i64 instead of inferring widths from minimum/maximum",
        dest="simple_integers",
    )
    parser.add_argument(
        "--api-root",
        default=DEFAULT_API_ROOT,
        help="Path prefix stripped when deriving function names (default: %(default)s)",
        dest="api_root",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parsed_args = parser.parse_args(args)

    if parsed_args.input_file is None:
        parser.error("You need to provide a YAML schema to generate from (--input-file).")

    return parsed_args


def build_config(parsed_args: argparse.Namespace) -> GeneratorConfig:
    """Build the generator configuration from parsed arguments."""
    return GeneratorConfig(
        workaround_mode=parsed_args.workaround_mode,
        debug=parsed_args.debug,
        unsanitary_objects=tuple(parsed_args.unsanitary_objects or DEFAULT_UNSANITARY_OBJECTS),
        infer_integer_width=not parsed_args.simple_integers,
        api_root=parsed_args.api_root,
    )


def print_verbose_info(*, path_count: int, schema_count: int) -> None:
    """Print verbose information about the parsed schema."""
    print(f"Parsed {path_count} paths")
    print(f"Found {schema_count} schemas")


def print_skipped(generator: RustCodeGenerator, *, verbose: bool) -> None:
    """Report components and parameters that were not generated as requested."""
    if generator.skipped_schemas:
        print(
            f"{len(generator.skipped_schemas)} schemas are not objects or arrays and were emitted as type aliases",
            file=sys.stderr,
        )
        if verbose:
            for name in generator.skipped_schemas:
                print(f"  Structure {name} couldn't be generated", file=sys.stderr)

    for message in generator.skipped_parameters:
        print(f"Skipped parameter: {message}", file=sys.stderr)


def print_generation_summary(*, file_count: int, files: dict[Path, str], output_dir: Path) -> None:
    """Print summary of generated files."""
    print(f"Generated {file_count} files:")
    for file_path in sorted(files.keys()):
        print(f"  {file_path}")
    print(f"\nRust client generated successfully in {output_dir}")


@contextlib.contextmanager
def backup_and_clean_output_dir(output_dir: Path) -> Generator[None, None, None]:
    """A context manager to backup and clean the generated entries of the output directory.

    Files the generator does not own are left in place.
    """
    backup_dir = None
    existing = [output_dir / name for name in GENERATED_ENTRIES if (output_dir / name).exists()]
    if existing:
        backup_dir = Path(tempfile.mkdtemp())
        for entry in existing:
            if entry.is_dir():
                shutil.copytree(entry, backup_dir / entry.name)
            else:
                shutil.copy2(entry, backup_dir / entry.name)

    clean_output_directory(output_dir)

    try:
        yield
    except Exception:
        if backup_dir:
            print(
                "Error: Generation failed. Restoring original content.",
                file=sys.stderr,
            )
            clean_output_directory(output_dir)
            shutil.copytree(backup_dir, output_dir, dirs_exist_ok=True)
        raise
    finally:
        if backup_dir:
            shutil.rmtree(backup_dir)


def generate_rust_client_from_schema(
    *,
    input_file: Path,
    output_dir: Path,
    config: GeneratorConfig,
    verbose: bool,
) -> dict[Path, str]:
    """Generate the Rust client files from a schema file, without writing them."""
    parser = OASParser()
    document = parser.parse_file(input_file)

    if verbose:
        print_verbose_info(path_count=len(document.paths), schema_count=len(document.schemas))

    generator = RustCodeGenerator(config)
    files = generator.generate_client(document, output_dir)
    print_skipped(generator, verbose=verbose)
    return files


def main(args: list[str] | None = None) -> int:
    """Generate a Rust client from an OpenAPI schema."""
    parsed_args = parse_command_line_args(args)

    try:
        generated_files = generate_rust_client_from_schema(
            input_file=parsed_args.input_file,
            output_dir=parsed_args.output_dir,
            config=build_config(parsed_args),
            verbose=parsed_args.verbose,
        )

        with backup_and_clean_output_dir(parsed_args.output_dir):
            write_files_to_disk(generated_files)

        if parsed_args.verbose:
            print_generation_summary(
                file_count=len(generated_files),
                files=generated_files,
                output_dir=parsed_args.output_dir,
            )
        else:
            print(f"Rust client generated successfully in {parsed_args.output_dir}")

        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Schema file not found: {parsed_args.input_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        print(f"Error: Invalid YAML in schema file: {e}", file=sys.stderr)
        return EXIT_INVALID_YAML
    except SchemaError as e:
        print(f"Error: Invalid schema: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_INVALID_SCHEMA
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
