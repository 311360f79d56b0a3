"""Evokit core module - shared errors, ordering helpers and random source."""

from evokit.core.errors import (
    ConfigError,
    EngineStateError,
    EvokitError,
    ValidationError,
)
from evokit.core.ordering import (
    float_ordering_maximize,
    float_ordering_minimize,
    fmax,
    fmin,
    imax,
    imin,
)
from evokit.core.random import RANDOM_SEED_ENV, create_rng, seed_from_env

__all__ = [
    # Errors
    "EvokitError",
    "ConfigError",
    "ValidationError",
    "EngineStateError",
    # Ordering
    "float_ordering_maximize",
    "float_ordering_minimize",
    "fmax",
    "fmin",
    "imax",
    "imin",
    # Random
    "RANDOM_SEED_ENV",
    "create_rng",
    "seed_from_env",
]
