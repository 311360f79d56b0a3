"""Shared fixtures for the Evokit test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import random

import pytest

from evokit.encoding.binary import Binary, OneMax
from evokit.evolution.fitness import Maximize
from evokit.evolution.individual import Individual, create_individuals
from evokit.evolution.population import Population


@pytest.fixture
def rng() -> random.Random:
    """A deterministically seeded random source."""
    return random.Random(2024)


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory (and so ~/.evokit) at a temp dir."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("EVOKIT_RANDOM_SEED", raising=False)
    return tmp_path


def _make_population(*genomes: str) -> Population[Binary]:
    individuals: list[Individual[Binary]] = create_individuals(
        OneMax(), [Binary.from_str(g) for g in genomes]
    )
    return Population.build(individuals, Maximize())


def _make_weighted_population(fitness_values: list[float]) -> Population[Binary]:
    individuals = [
        Individual(genome=Binary.from_str(format(i, "08b")), objective_value=f)
        for i, f in enumerate(fitness_values)
    ]
    return Population(individuals, fitness_values, size_limit=len(individuals))


@pytest.fixture
def make_population() -> Callable[..., Population[Binary]]:
    """Factory building a OneMax population scored with Maximize from bit strings."""
    return _make_population


@pytest.fixture
def make_weighted_population() -> Callable[[list[float]], Population[Binary]]:
    """Factory building a population with explicit fitness values."""
    return _make_weighted_population
