"""
File utilities for the generator.

Directory and file operations used when flushing the generated crate.
"""

import shutil
from pathlib import Path
from typing import Final

# Top-level entries of the output directory owned by the generator
GENERATED_ENTRIES: Final = ("Cargo.toml", "build.rs", "README.md", "src")


def write_files_to_disk(files: dict[Path, str]) -> None:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.
    """
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def clean_output_directory(output_dir: Path) -> None:
    """Remove the entries a previous run generated, leaving everything else.

    Args:
        output_dir: Path to the output directory to clean.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    for name in GENERATED_ENTRIES:
        entry = output_dir / name
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        elif entry.exists() or entry.is_symlink():
            entry.unlink()


def crate_name_for(output_dir: Path) -> str:
    """Derive the crate name from the output directory.

    A relative path such as ``.`` or ``../out`` is resolved first so the
    last real directory name is used.

    Args:
        output_dir: Directory the crate is generated into.

    Returns:
        The directory's basename.
    """
    return Path(output_dir).resolve().name
