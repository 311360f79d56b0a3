"""Generation snapshots and termination criteria.

The engine emits one Generation per step and asks every terminator whether
the run should stop. Two criteria are provided:

1. RunningMean: the best objective value has stagnated over a window
2. MaxGeneration: hard cap on the generation index
"""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import structlog

from evokit.core.errors import ConfigError, ValidationError
from evokit.evolution.individual import Individual
from evokit.evolution.population import Population, sort_members_by_fitness

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Generation[G: Hashable]:
    """A population snapshot at one generation index.

    The population is the engine's working population at the time the
    generation was emitted; consumers must not modify it.
    """

    index: int
    population: Population[G]

    def best_individual(self) -> Individual[G]:
        """Return the fittest individual of this generation.

        Raises:
            ValidationError: If the population is empty.
        """
        best = self.population.best_member()
        if best is None:
            raise ValidationError(
                "cannot take the best individual of an empty population",
                field="population",
                value=self.population.size(),
            )
        return best.individual

    def summary(self) -> list[str]:
        """Log and return the members of this generation, fittest first."""
        lines = [str(m) for m in sort_members_by_fitness(self.population.members())]
        best = self.population.best_member()
        log.info(
            "engine.generation.summarized",
            index=self.index,
            population_size=self.population.size(),
            best=str(best) if best is not None else None,
        )
        for line in lines:
            log.debug("engine.generation.member", member=line)
        return lines


@runtime_checkable
class Terminator(Protocol):
    """Protocol for deciding when the generational loop stops."""

    def meets[G: Hashable](self, generation: Generation[G]) -> bool:
        """Return True if the run should stop after generation."""
        ...


@dataclass
class RunningMean:
    """Stop when the best objective value stops moving.

    The best objective values of the most recent nlast generations are kept
    in a window. Once the window is full, each new best value is compared
    with the window mean; if they differ by less than epsilon the search
    has stagnated. Otherwise the window slides forward by one.

    Attributes:
        nlast: Window size in generations.
        epsilon: Convergence threshold on |best - mean|.
    """

    nlast: int = 30
    epsilon: float = 1e-6
    scores: deque[float] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.nlast < 1:
            raise ConfigError(
                f"nlast must be at least 1, got {self.nlast}",
                config_key="running_mean_nlast",
            )
        if not self.epsilon > 0.0:
            raise ConfigError(
                f"epsilon must be positive, got {self.epsilon}",
                config_key="epsilon",
            )

    def meets[G: Hashable](self, generation: Generation[G]) -> bool:
        best = generation.best_individual().objective_value
        if len(self.scores) < self.nlast:
            self.scores.append(best)
            return False

        mean = sum(self.scores) / len(self.scores)
        if abs(best - mean) < self.epsilon:
            log.info(
                "termination.running_mean.converged",
                generation=generation.index,
                best=best,
                mean=mean,
                nlast=self.nlast,
            )
            return True

        self.scores.popleft()
        self.scores.append(best)
        return False


@dataclass
class MaxGeneration:
    """Stop once the generation index reaches max_generations."""

    max_generations: int

    def __post_init__(self) -> None:
        if self.max_generations < 0:
            raise ConfigError(
                f"max_generations must be non-negative, got {self.max_generations}",
                config_key="max_generations",
            )

    def meets[G: Hashable](self, generation: Generation[G]) -> bool:
        if generation.index >= self.max_generations:
            log.info(
                "termination.max_generation.reached",
                generation=generation.index,
                max_generations=self.max_generations,
            )
            return True
        return False
