"""Input validation utilities for CLI"""

from pathlib import Path
from typing import Optional, Tuple

import click


def validate_output_path(ctx, param, value) -> Optional[Path]:
    """Validate output path and ensure parent directory exists"""
    if value is None:
        return None

    path = Path(value)

    if path.exists() and path.is_dir():
        raise click.BadParameter(f"Output path is a directory: {path}")

    parent = path.parent
    if not parent.exists():
        raise click.BadParameter(f"Parent directory does not exist: {parent}")

    return path


def normalize_subtype(name: str) -> str:
    """Turn '/Link' or ' Link ' into 'Link'"""
    return name.strip().lstrip("/")


def validate_subtypes(ctx, param, value) -> Tuple[str, ...]:
    """Validate --exclude values, accepting names with or without a leading slash"""
    subtypes = []
    for name in value:
        subtype = normalize_subtype(name)
        if not subtype or any(c.isspace() for c in subtype):
            raise click.BadParameter(f"Not a valid annotation subtype: {name!r}")
        subtypes.append(subtype)
    return tuple(subtypes)


def validate_merge_inputs(ctx, param, value) -> Tuple[Path, ...]:
    """Require at least two PDF files for a merge"""
    if len(value) < 2:
        raise click.BadParameter(
            f"at least two files are required (got {len(value)})"
        )
    return value
