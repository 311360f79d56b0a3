"""Engine - the generational loop.

One run goes through these states:

    UNINITIALIZED → SEEDED → STEPPING → TERMINATED

    Gen 0: Seeds → Evaluate → Population
    Gen 1: Breed → Evaluate offspring → Combine → Score → Survive
    Gen 2: Breed → Evaluate offspring → Combine → Score → Survive
    ...until a terminator fires or the caller stops pulling generations

The loop is strictly sequential. Objective evaluation of new genomes is the
only step that may fan out over worker threads.

Usage:
    engine = (
        Engine.create()
        .with_creator(OneMax())
        .with_fitness(Maximize())
        .with_algorithm(EvolutionAlgorithm(breeder, Survivor()))
        .with_rng(create_rng(42))
    )
    for generation in engine.evolve(seeds):
        if generation.index >= 50:
            break
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
import random
from typing import TYPE_CHECKING

import structlog

from evokit.core.errors import ConfigError, EngineStateError
from evokit.core.random import create_rng
from evokit.evolution.fitness import FitnessEvaluator
from evokit.evolution.individual import ObjectiveEvaluator
from evokit.evolution.population import Population
from evokit.evolution.termination import Generation, Terminator
from evokit.gears.valuer import Valuer
from evokit.observability.logging import bind_context, unbind_context

if TYPE_CHECKING:
    from evokit.gears.breeder import Breeder
    from evokit.gears.survivor import SurvivalOperator

log = structlog.get_logger()


class EngineState(StrEnum):
    """Lifecycle state of an engine run."""

    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    STEPPING = "stepping"
    TERMINATED = "terminated"


@dataclass(frozen=True, slots=True)
class EvolutionAlgorithm[G: Hashable]:
    """The breeder and survivor pair driving each generation."""

    breeder: Breeder[G]
    survivor: SurvivalOperator[G]


class Engine[G: Hashable]:
    """Generational evolution over a fixed-size population.

    Configure with the with_* builder methods, then call evolve() once with
    the seed genomes and iterate over the generations it yields. The engine
    owns its random source and threads it through every operator call.
    """

    def __init__(self) -> None:
        self._valuer: Valuer[G] = Valuer()
        self._algorithm: EvolutionAlgorithm[G] | None = None
        self._rng: random.Random | None = None
        self._n_offspring: int | None = None
        self._terminators: list[Terminator] = []

        self._state = EngineState.UNINITIALIZED
        self._started = False
        self._seeds: list[G] = []
        self._size_limit = 0
        self._population: Population[G] | None = None
        self._index = 0

    @classmethod
    def create(cls) -> Engine[G]:
        """Create an unconfigured engine."""
        return cls()

    def with_creator(self, creator: ObjectiveEvaluator[G]) -> Engine[G]:
        """Set the objective evaluator."""
        self._valuer.with_creator(creator)
        return self

    def with_fitness(self, fitness: FitnessEvaluator[G]) -> Engine[G]:
        """Set the fitness evaluator."""
        self._valuer.with_fitness(fitness)
        return self

    def with_algorithm(self, algorithm: EvolutionAlgorithm[G]) -> Engine[G]:
        """Set the breeder and survivor."""
        self._algorithm = algorithm
        return self

    def with_rng(self, rng: random.Random) -> Engine[G]:
        """Set the random source. Defaults to create_rng()."""
        self._rng = rng
        return self

    def with_max_workers(self, max_workers: int | None) -> Engine[G]:
        """Set the number of threads used for objective evaluation."""
        self._valuer.max_workers = max_workers
        return self

    def with_offspring(self, n: int) -> Engine[G]:
        """Set the number of genomes bred per generation.

        Defaults to the population size limit.

        Raises:
            ConfigError: If n is less than 1.
        """
        if n < 1:
            raise ConfigError(
                f"number of offspring must be at least 1, got {n}",
                config_key="n_offspring",
            )
        self._n_offspring = n
        return self

    def with_terminator(self, terminator: Terminator) -> Engine[G]:
        """Add a termination criterion. Any criterion firing stops the run."""
        self._terminators.append(terminator)
        return self

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def population(self) -> Population[G] | None:
        """The current population, or None before seeding."""
        return self._population

    def evolve(self, seeds: Sequence[G]) -> Iterator[Generation[G]]:
        """Start a run from seeds and return the lazy sequence of generations.

        The population size limit is fixed to len(seeds) for the whole run.
        Nothing is evaluated until the first generation is requested.

        Args:
            seeds: Initial genomes. Must not be empty.

        Returns:
            Iterator yielding generation 0, 1, 2, ... one per step.

        Raises:
            EngineStateError: If operators are unbound, the engine has
                already been started, or seeds is empty.
        """
        if self._started:
            raise EngineStateError(
                "evolve() can only be called once per engine",
                state=self._state.value,
            )
        missing = [
            name
            for name, value in (
                ("creator", self._valuer.creator),
                ("fitness", self._valuer.fitness),
                ("algorithm", self._algorithm),
            )
            if value is None
        ]
        if missing:
            raise EngineStateError(
                f"operators not set: {', '.join(missing)}",
                state=self._state.value,
                details={"missing": missing},
            )
        if not seeds:
            raise EngineStateError("cannot evolve from an empty seed set", state=self._state.value)

        self._started = True
        self._seeds = list(seeds)
        self._size_limit = len(self._seeds)
        if self._rng is None:
            self._rng = create_rng()
        return self._generations()

    def _generations(self) -> Iterator[Generation[G]]:
        while (generation := self.step()) is not None:
            yield generation

    def step(self) -> Generation[G] | None:
        """Advance the run by one generation.

        Returns:
            The new generation, or None once a terminator has fired.

        Raises:
            EngineStateError: If evolve() has not been called.
        """
        if not self._started:
            raise EngineStateError("call evolve() before step()", state=self._state.value)
        if self._state == EngineState.TERMINATED:
            return None

        bind_context(generation=self._index if self._population is None else self._index + 1)
        try:
            if self._population is None:
                generation = self._seed()
            else:
                generation = self._advance()
        finally:
            unbind_context("generation")

        if self._should_terminate(generation):
            self._state = EngineState.TERMINATED
            log.info("engine.run.terminated", generation=generation.index)
        return generation

    def _seed(self) -> Generation[G]:
        individuals = self._valuer.create_individuals(self._seeds)
        self._population = self._valuer.build_population(individuals).with_size_limit(
            self._size_limit
        )
        self._seeds = []
        self._state = EngineState.SEEDED

        generation = Generation(index=0, population=self._population)
        log.info(
            "engine.population.seeded",
            population_size=self._population.size(),
            size_limit=self._size_limit,
            best_objective=_best_objective(generation),
        )
        return generation

    def _advance(self) -> Generation[G]:
        population, algorithm, rng = self._population, self._algorithm, self._rng
        if population is None or algorithm is None or rng is None:
            raise EngineStateError(
                "cannot advance an engine that has not been seeded",
                state=self._state.value,
            )

        n = self._n_offspring or population.size_limit
        genomes = algorithm.breeder.breed(n, population, rng)
        offspring = self._valuer.create_individuals(genomes)

        combined = [*population.individuals, *offspring]
        next_population = self._valuer.build_population(combined).with_size_limit(
            self._size_limit
        )
        removed = algorithm.survivor.survive(next_population, rng)

        self._population = next_population
        self._index += 1
        self._state = EngineState.STEPPING

        generation = Generation(index=self._index, population=next_population)
        log.info(
            "engine.generation.completed",
            offspring=len(offspring),
            removed=removed,
            population_size=next_population.size(),
            best_objective=_best_objective(generation),
        )
        return generation

    def _should_terminate(self, generation: Generation[G]) -> bool:
        # every terminator sees every generation so stateful ones stay in sync
        signals = [t.meets(generation) for t in self._terminators]
        return any(signals)


def _best_objective[G: Hashable](generation: Generation[G]) -> float | None:
    best = generation.population.best_member()
    return best.objective_value if best is not None else None
