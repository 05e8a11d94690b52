"""Workspace configuration loaded from ``velang.toml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "velang.toml"
DEFAULT_HOME = "~/.velang"
DEFAULT_LIBRARY_DIR = "lib/std/src"


class AssistConfig(BaseModel):
    """Configuration for module discovery and completion."""

    model_config = ConfigDict(extra="forbid")

    home: str = Field(
        default=DEFAULT_HOME,
        description="VeLang installation directory",
    )
    library_dir: str = Field(
        default=DEFAULT_LIBRARY_DIR,
        description="Standard library sources, relative to home unless absolute",
    )
    source_suffix: str = Field(
        default=".ve",
        description="Extension of VeLang source files",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for workspace files hidden from local modules",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @field_validator("source_suffix", mode="before")
    @classmethod
    def validate_source_suffix(cls, v: Any) -> Any:
        """Require a dotted extension such as ``.ve``."""
        if not isinstance(v, str):
            msg = "source_suffix must be a string"
            raise TypeError(msg)
        if not v.startswith(".") or len(v) < 2 or "/" in v:
            msg = f"Invalid source_suffix '{v}': expected an extension like '.ve'"
            raise ValueError(msg)
        return v

    def library_root(self) -> Path:
        """Resolve the standard library directory."""
        library = Path(self.library_dir).expanduser()
        if library.is_absolute():
            return library
        return Path(self.home).expanduser() / library


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> AssistConfig:
    """Load configuration from velang.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return AssistConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AssistConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "AssistConfig",
    "ConfigError",
    "load_config",
]
