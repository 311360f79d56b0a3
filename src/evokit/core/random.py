"""Seedable random source for the engine.

Every operator receives its random source as an argument; there is no
module-level generator. A run is reproducible by fixing the seed, either
explicitly or through the ``EVOKIT_RANDOM_SEED`` environment variable.

Usage:
    from evokit.core.random import create_rng

    rng = create_rng(42)
    engine = Engine.create().with_rng(rng)
"""

from __future__ import annotations

import os
import random

import structlog

from evokit.core.errors import ConfigError

log = structlog.get_logger()

RANDOM_SEED_ENV = "EVOKIT_RANDOM_SEED"


def seed_from_env() -> int | None:
    """Read the random seed from the environment.

    Returns:
        The integer seed, or None if EVOKIT_RANDOM_SEED is unset or blank.

    Raises:
        ConfigError: If the variable is set but is not an integer.
    """
    raw = os.environ.get(RANDOM_SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(
            f"invalid env var {RANDOM_SEED_ENV}: {raw!r} is not an integer",
            config_key=RANDOM_SEED_ENV,
        ) from e


def create_rng(seed: int | None = None) -> random.Random:
    """Create a random source.

    Args:
        seed: Explicit seed. Falls back to EVOKIT_RANDOM_SEED, then to a
            freshly drawn seed.

    Returns:
        A seeded random.Random instance.
    """
    if seed is None:
        seed = seed_from_env()
    if seed is None:
        seed = random.SystemRandom().getrandbits(64)

    log.info("random.rng.initialized", seed=seed)
    return random.Random(seed)
