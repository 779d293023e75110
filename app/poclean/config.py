"""Cleaner configuration and settings.

This module provides the configuration model and loading functions for
a cleaning run. Settings are merged from, lowest priority first:

1. Built-in defaults
2. ``[tool.poclean]`` in ``<root>/pyproject.toml``
3. ``<root>/.poclean.toml``
4. An explicit ``--config`` file
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".poclean.toml"
PYPROJECT_NAME = "pyproject.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be read or is invalid."""


class CleanerConfig(BaseModel):
    """Configuration for a cleaning run.

    Attributes:
        catalog_pattern: Glob matching translation catalogs.
        source_patterns: Globs matching source files searched for keys.
        template_patterns: Globs matching template files searched for keys.
        ignore_file: Ignore file name, relative to the project root.
        extra_ignore: Patterns always ignored in addition to the ignore file.
        encoding: Text encoding of catalogs and candidate files.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    catalog_pattern: Annotated[
        str,
        Field(min_length=1, description="Glob matching translation catalogs"),
    ] = "*.po"
    source_patterns: Annotated[
        tuple[str, ...],
        Field(description="Globs matching source files"),
    ] = ("*.py",)
    template_patterns: Annotated[
        tuple[str, ...],
        Field(description="Globs matching template files"),
    ] = ("*.html",)
    ignore_file: Annotated[
        str,
        Field(min_length=1, description="Ignore file relative to the root"),
    ] = ".gitignore"
    extra_ignore: Annotated[
        tuple[str, ...],
        Field(description="Always-ignored patterns"),
    ] = (".venv",)
    encoding: Annotated[
        str,
        Field(min_length=1, description="Text encoding of scanned files"),
    ] = "utf-8"

    @field_validator("source_patterns", "template_patterns")
    @classmethod
    def validate_patterns(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty glob patterns."""
        if any(not pattern for pattern in v):
            msg = "patterns must not be empty strings"
            raise ValueError(msg)
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError:
            msg = f"unknown encoding '{v}'"
            raise ValueError(msg) from None
        return v

    @property
    def candidate_patterns(self) -> tuple[str, ...]:
        """Source patterns followed by template patterns."""
        return (*self.source_patterns, *self.template_patterns)


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file into a dictionary.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e


def _pyproject_section(path: Path) -> dict[str, Any]:
    """Extract the ``[tool.poclean]`` table from a pyproject file."""
    tool: object = _read_toml(path).get("tool", {})
    if not isinstance(tool, dict):
        return {}
    section: object = tool.get("poclean", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[tool.poclean] in {path} must be a table")
    return section


def load_config(root: Path, path: Path | None = None) -> CleanerConfig:
    """Load the configuration for a project root.

    Missing project files are skipped silently. Later sources override
    earlier ones key by key.

    Args:
        root: Project root directory.
        path: Explicit config file. It must exist when given.

    Returns:
        Validated CleanerConfig.

    Raises:
        ConfigError: If a file is unreadable, not valid TOML, or contains
            unknown or invalid settings.
    """
    data: dict[str, Any] = {}

    pyproject = root / PYPROJECT_NAME
    if pyproject.is_file():
        section = _pyproject_section(pyproject)
        if section:
            logger.debug("Loaded [tool.poclean] from %s", pyproject)
        data.update(section)

    project_config = root / PROJECT_CONFIG_NAME
    if project_config.is_file():
        logger.debug("Loaded project config from %s", project_config)
        data.update(_read_toml(project_config))

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Loaded explicit config from %s", path)
        data.update(_read_toml(path))

    try:
        return CleanerConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def get_default_config() -> CleanerConfig:
    """Create a default CleanerConfig."""
    return CleanerConfig()
