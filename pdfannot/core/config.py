"""Configuration management for pdfannot"""

import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None

from pdfannot.core.exceptions import ConfigurationError
from pdfannot.core.constants import (
    DEFAULT_EXCLUDE,
    DEFAULT_MERGE_DEST,
    DEFAULT_STRIP_DEST,
    ColorChoice,
)

CONFIG_ENV_VAR = "PDFANNOT_CONFIG"


@dataclass
class AnnotationsConfig:
    exclude: list = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    merge_dest: str = DEFAULT_MERGE_DEST
    strip_dest: str = DEFAULT_STRIP_DEST
    force: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnnotationsConfig":
        exclude = data.get("exclude", list(DEFAULT_EXCLUDE))
        if isinstance(exclude, str):
            exclude = [exclude]
        if not isinstance(exclude, list) or not all(isinstance(e, str) for e in exclude):
            raise ConfigurationError("annotations.exclude must be a list of subtype names")

        return cls(
            exclude=exclude,
            merge_dest=data.get("merge_dest", DEFAULT_MERGE_DEST),
            strip_dest=data.get("strip_dest", DEFAULT_STRIP_DEST),
            force=data.get("force", False),
        )


@dataclass
class OutputConfig:
    color: str = ColorChoice.AUTO.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputConfig":
        color = data.get("color", ColorChoice.AUTO.value)
        try:
            ColorChoice(color)
        except ValueError:
            choices = ", ".join(c.value for c in ColorChoice)
            raise ConfigurationError(f"output.color must be one of: {choices} (got {color!r})")
        return cls(color=color)


@dataclass
class Config:
    annotations: AnnotationsConfig = field(default_factory=AnnotationsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    verbose: bool = False
    debug: bool = False
    quiet: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        return cls(
            annotations=AnnotationsConfig.from_dict(data.get("annotations", {})),
            output=OutputConfig.from_dict(data.get("output", {})),
            verbose=data.get("verbose", False),
            debug=data.get("debug", False),
            quiet=data.get("quiet", False),
        )

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from TOML file"""
        if tomllib is None:
            raise ConfigurationError(
                "TOML support requires tomli package for Python < 3.11. "
                "Install with: pip install tomli"
            )

        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration from {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration"""
        return cls()


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from an explicitly given file or use defaults

    Only ``path`` or the PDFANNOT_CONFIG environment variable are consulted;
    no configuration file is ever looked up implicitly.
    """
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])

    if path is not None:
        return Config.from_file(path)
    return Config.default()
