"""Configuration loading for depclean runs."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from depclean.exceptions import DepcleanError

CONFIG_FILE_NAME = "depclean.yaml"
DEFAULT_OUTPUT_FILE_NAME = "clean.pom.xml"

# Option names as they appear in plugin configuration, mapped to field names
OPTION_ALIASES = {
    "outputDirectory": "output_directory",
    "outputFileName": "output_file_name",
    "failOnWarning": "fail_on_warning",
    "failBuild": "fail_build",
    "verbose": "verbose",
    "ignoreNonCompile": "ignore_non_compile",
}

BOOLEAN_OPTIONS = ("fail_on_warning", "fail_build", "verbose", "ignore_non_compile")


class ConfigError(DepcleanError):
    """Raised when configuration is invalid or missing."""


@dataclass
class CleanupConfig:
    """Options shared by the clean-dep and clean-dep-mgt commands.

    Attributes:
        output_directory: Where clean-dep writes its output. None means the
            project's build directory.
        output_file_name: Name of the rewritten POM.
        fail_on_warning: clean-dep aborts when a warning occurs.
        fail_build: clean-dep-mgt aborts when a warning occurs.
        verbose: Log the analysis results in detail.
        ignore_non_compile: Keep unused declared dependencies that are not
            compile scoped.
    """

    output_directory: Path | None = None
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME
    fail_on_warning: bool = True
    fail_build: bool = False
    verbose: bool = False
    ignore_non_compile: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path | None = None) -> CleanupConfig:
        """Create config from a dictionary of options.

        Args:
            data: Option mapping, camelCase or snake_case keys.
            root_path: Directory relative output directories resolve against.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If an option is unknown or has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option: {key}")
            values[name] = value

        for name in BOOLEAN_OPTIONS:
            if name in values and not isinstance(values[name], bool):
                raise ConfigError(f"Option '{name}' must be true or false")

        if values.get("output_directory") is not None:
            output_directory = Path(values["output_directory"])
            if root_path is not None and not output_directory.is_absolute():
                output_directory = root_path / output_directory
            values["output_directory"] = output_directory

        if "output_file_name" in values:
            if not isinstance(values["output_file_name"], str) or not values["output_file_name"]:
                raise ConfigError("Option 'output_file_name' must be a non-empty string")

        return cls(**values)

    def merged(self, **overrides: Any) -> CleanupConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(config_path: Path | str) -> CleanupConfig:
    """Load depclean configuration from a YAML file.

    Args:
        config_path: Path to depclean.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return CleanupConfig.from_dict(data, config_path.parent)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find depclean.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to depclean.yaml, or None if there is none.
    """
    if start_path is None:
        start_path = Path.cwd()
    current = Path(start_path).resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    return None
