"""Valuer: turns genomes into individuals and individuals into a population."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence

from evokit.core.errors import EngineStateError
from evokit.evolution.fitness import FitnessEvaluator
from evokit.evolution.individual import Individual, ObjectiveEvaluator, create_individuals
from evokit.evolution.population import Population


class Valuer[G: Hashable]:
    """Holds the objective evaluator ("creator") and the fitness policy."""

    def __init__(
        self,
        creator: ObjectiveEvaluator[G] | None = None,
        fitness: FitnessEvaluator[G] | None = None,
        *,
        max_workers: int | None = None,
    ) -> None:
        self.creator = creator
        self.fitness = fitness
        self.max_workers = max_workers

    def with_creator(self, creator: ObjectiveEvaluator[G]) -> Valuer[G]:
        """Set the objective evaluator used to create individuals."""
        self.creator = creator
        return self

    def with_fitness(self, fitness: FitnessEvaluator[G]) -> Valuer[G]:
        """Set the fitness evaluator used to build populations."""
        self.fitness = fitness
        return self

    def create_individuals(self, genomes: Iterable[G]) -> list[Individual[G]]:
        """Evaluate genomes into individuals, once per distinct genome.

        Raises:
            EngineStateError: If no creator is set.
        """
        if self.creator is None:
            raise EngineStateError("creator not set", state="uninitialized")
        return create_individuals(self.creator, genomes, max_workers=self.max_workers)

    def build_population(self, individuals: Sequence[Individual[G]]) -> Population[G]:
        """Build a population scored with the fitness evaluator.

        Raises:
            EngineStateError: If no fitness evaluator is set.
        """
        if self.fitness is None:
            raise EngineStateError("fitness not set", state="uninitialized")
        return Population.build(individuals, self.fitness)
