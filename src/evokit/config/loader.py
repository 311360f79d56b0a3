"""Configuration loading and management for Evokit.

This module provides functions for loading, creating, and validating
Evokit configuration files.

Functions:
    load_config: Load configuration from ~/.evokit/config.yaml
    create_default_config: Create the default configuration file
    ensure_config_dir: Ensure ~/.evokit/ directory exists
    config_exists: Check whether the configuration file exists
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError
import yaml

# Load .env file from current directory and ~/.evokit/
load_dotenv()  # Current directory .env
load_dotenv(Path.home() / ".evokit" / ".env")  # Global .env

from evokit.config.models import EvokitConfig, get_config_dir, get_default_config
from evokit.core.errors import ConfigError

CONFIG_FILENAME = "config.yaml"


def ensure_config_dir() -> Path:
    """Ensure the configuration directory exists.

    Creates ~/.evokit/ and its logs/ subdirectory if they don't exist.

    Returns:
        Path to the configuration directory.
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "logs").mkdir(exist_ok=True)
    return config_dir


def dump_config(config: EvokitConfig) -> str:
    """Render a configuration as YAML text."""
    return yaml.dump(
        config.model_dump(mode="json"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def create_default_config(
    config_dir: Path | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Create the default configuration file.

    Args:
        config_dir: Directory to create the file in. Defaults to ~/.evokit/
        overwrite: If True, overwrite an existing file. Defaults to False.

    Returns:
        Path to the created config.yaml.

    Raises:
        ConfigError: If the file exists and overwrite=False.
    """
    if config_dir is None:
        config_dir = ensure_config_dir()
    else:
        config_dir.mkdir(parents=True, exist_ok=True)

    config_path = config_dir / CONFIG_FILENAME
    if config_path.exists() and not overwrite:
        raise ConfigError(
            f"Configuration file already exists: {config_path}",
            config_file=str(config_path),
        )

    with config_path.open("w") as f:
        f.write(dump_config(get_default_config()))

    return config_path


def _format_validation_errors(e: PydanticValidationError) -> str:
    error_messages = []
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"]) or "config"
        msg = error["msg"]
        error_messages.append(f"  - {loc}: {msg}")
    return "\n".join(error_messages)


def load_config(config_path: Path | None = None) -> EvokitConfig:
    """Load configuration from YAML file.

    Loads and validates configuration from the specified path or
    the default ~/.evokit/config.yaml.

    Args:
        config_path: Path to config file. Defaults to ~/.evokit/config.yaml.

    Returns:
        Validated EvokitConfig instance.

    Raises:
        ConfigError: If file doesn't exist, is malformed, or fails validation.
    """
    if config_path is None:
        config_path = get_config_dir() / CONFIG_FILENAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}. "
            "Run `evokit config init` to create default configuration.",
            config_file=str(config_path),
        )

    try:
        with config_path.open() as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse configuration file: {e}",
            config_file=str(config_path),
            details={"yaml_error": str(e)},
        ) from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError(
            "Configuration file must contain a mapping at the top level",
            config_file=str(config_path),
        )

    try:
        return EvokitConfig.model_validate(config_dict)
    except PydanticValidationError as e:
        raise ConfigError(
            "Configuration validation failed:\n" + _format_validation_errors(e),
            config_file=str(config_path),
            details={"validation_errors": e.errors(include_url=False)},
        ) from e


def config_exists() -> bool:
    """Check if the configuration file exists.

    Returns:
        True if ~/.evokit/config.yaml exists.
    """
    return (get_config_dir() / CONFIG_FILENAME).exists()
