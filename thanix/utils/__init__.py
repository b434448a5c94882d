"""
Utilities Module for Rust Client Generation

This module provides utility functions for file operations and string case
conversions used throughout the generator.
"""

from .file_utils import clean_output_directory, crate_name_for, write_files_to_disk
from .string_case import (
    escape_rust_keyword,
    normalize_rust_identifier,
    pascalcase,
    rust_identifier,
    rust_pascal_case,
    rust_snake_case,
    snakecase,
    underscore_join,
)

__all__ = [
    "clean_output_directory",
    "crate_name_for",
    "escape_rust_keyword",
    "normalize_rust_identifier",
    "pascalcase",
    "rust_identifier",
    "rust_pascal_case",
    "rust_snake_case",
    "snakecase",
    "underscore_join",
    "write_files_to_disk",
]
