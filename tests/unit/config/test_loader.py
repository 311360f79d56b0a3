"""Unit tests for evokit.config.loader module."""

from pathlib import Path

import pytest
import yaml

from evokit.config.loader import (
    CONFIG_FILENAME,
    config_exists,
    create_default_config,
    dump_config,
    ensure_config_dir,
    load_config,
)
from evokit.config.models import get_default_config
from evokit.core.errors import ConfigError


class TestConfigDir:
    """Test configuration directory handling."""

    def test_ensure_config_dir(self, home_dir: Path) -> None:
        """ensure_config_dir() creates ~/.evokit and its logs directory."""
        config_dir = ensure_config_dir()
        assert config_dir == home_dir / ".evokit"
        assert (config_dir / "logs").is_dir()

    def test_config_exists(self, home_dir: Path) -> None:
        """config_exists() reflects the default config file."""
        assert not config_exists()
        create_default_config()
        assert config_exists()


class TestCreateDefaultConfig:
    """Test create_default_config()."""

    def test_writes_defaults(self, tmp_path: Path) -> None:
        """The written file loads back as the default configuration."""
        path = create_default_config(tmp_path)
        assert path == tmp_path / CONFIG_FILENAME
        assert load_config(path) == get_default_config()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """An existing file is kept unless overwrite is set."""
        path = create_default_config(tmp_path)
        path.write_text("selection:\n  n: 3\nvariation:\n  method: triadic\n")

        with pytest.raises(ConfigError, match="already exists"):
            create_default_config(tmp_path)

        create_default_config(tmp_path, overwrite=True)
        assert load_config(path).selection.n == 2

    def test_dump_is_yaml(self) -> None:
        """dump_config() renders every section as YAML."""
        data = yaml.safe_load(dump_config(get_default_config()))
        assert set(data) >= {"selection", "variation", "breeder", "fitness", "termination"}
        assert data["fitness"]["energy_unit"] == "eV"


class TestLoadConfig:
    """Test load_config()."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file points the user at config init."""
        with pytest.raises(ConfigError, match="evokit config init") as exc_info:
            load_config(tmp_path / "nope.yaml")
        assert exc_info.value.config_file == str(tmp_path / "nope.yaml")

    def test_default_location(self, home_dir: Path) -> None:
        """Without a path the file in ~/.evokit is read."""
        create_default_config()
        assert load_config().fitness.method == "maximize"

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file means all defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == get_default_config()

    def test_partial_file(self, tmp_path: Path) -> None:
        """Sections left out keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("fitness:\n  method: minimize_energy\n  temperature: 500\n")
        config = load_config(path)
        assert config.fitness.method == "minimize_energy"
        assert config.fitness.temperature == 500.0
        assert config.selection.method == "elitist"

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """YAML syntax errors become ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("selection: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """The top level must be a mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_validation_errors_are_listed(self, tmp_path: Path) -> None:
        """Each invalid field is reported with its location."""
        path = tmp_path / "config.yaml"
        path.write_text("selection:\n  n: 0\nbreeder:\n  mutation_probability: 2\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        message = exc_info.value.message
        assert message.startswith("Configuration validation failed:")
        assert "  - selection.n:" in message
        assert "  - breeder.mutation_probability:" in message
        assert len(exc_info.value.details["validation_errors"]) == 2
