"""Configuration module for Evokit.

This module provides configuration loading, validation, and management
for Evokit runs. Configuration is stored in ~/.evokit/.

Main exports:
    EvokitConfig: Main configuration model
    load_config: Load config from YAML file
    create_default_config: Create the default config file
    config_exists: Check if the config file exists
    build_*: Build runtime operators from config sections

Usage:
    from evokit.config import load_config, build_breeder

    config = load_config()
    breeder = build_breeder(config)
"""

from evokit.config.factories import (
    build_breeder,
    build_fitness,
    build_logging_config,
    build_selection,
    build_survivor,
    build_terminators,
    build_variation,
)
from evokit.config.loader import (
    config_exists,
    create_default_config,
    dump_config,
    ensure_config_dir,
    load_config,
)
from evokit.config.models import (
    BreederConfig,
    EngineSettings,
    EvaluationConfig,
    EvokitConfig,
    FitnessConfig,
    LoggingConfig,
    RandomConfig,
    SelectionConfig,
    SurvivorConfig,
    TerminationConfig,
    VariationConfig,
    get_config_dir,
    get_default_config,
)

__all__ = [
    # Models
    "EvokitConfig",
    "RandomConfig",
    "SelectionConfig",
    "VariationConfig",
    "BreederConfig",
    "FitnessConfig",
    "SurvivorConfig",
    "TerminationConfig",
    "EvaluationConfig",
    "EngineSettings",
    "LoggingConfig",
    # Loader functions
    "load_config",
    "create_default_config",
    "dump_config",
    "ensure_config_dir",
    "config_exists",
    # Factories
    "build_selection",
    "build_variation",
    "build_fitness",
    "build_breeder",
    "build_survivor",
    "build_terminators",
    "build_logging_config",
    # Model helpers
    "get_config_dir",
    "get_default_config",
]
