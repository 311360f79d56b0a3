"""Population of evaluated individuals and their fitness values.

A population owns an ordered list of individuals, a parallel list of fitness
values (indices aligned), and a size limit. It may exceed its limit only
between combining parents with offspring and running survival.

Members are index-based views into a population: they pair an individual
with its fitness without copying either, and are only meaningful until the
population's collections are next reassigned.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from evokit.core.errors import ValidationError
from evokit.core.ordering import float_ordering_maximize, imax
from evokit.evolution.individual import Individual

if TYPE_CHECKING:
    from evokit.evolution.fitness import FitnessEvaluator


@dataclass(frozen=True, slots=True)
class Member[G: Hashable]:
    """A view of one individual together with its fitness in a population.

    Attributes:
        population: The population this member belongs to.
        index: Position of the individual in the population.
    """

    population: Population[G]
    index: int

    @property
    def individual(self) -> Individual[G]:
        return self.population.individuals[self.index]

    @property
    def fitness_value(self) -> float:
        return self.population.fitness_values[self.index]

    @property
    def objective_value(self) -> float:
        return self.individual.objective_value

    @property
    def genome(self) -> G:
        return self.individual.genome

    def __str__(self) -> str:
        return (
            f"indv {self.genome}: fitness = {self.fitness_value:5.2f} "
            f"objective value = {self.objective_value}"
        )


def sort_members_by_fitness[G: Hashable](members: Iterable[Member[G]]) -> list[Member[G]]:
    """Return members ordered by descending fitness, NaNs last.

    The sort is stable, so members with equal fitness keep their order.
    """
    return sorted(members, key=lambda m: float_ordering_maximize(m.fitness_value))


def evaluate_individuals[G: Hashable](
    individuals: Sequence[Individual[G]],
    fitness: FitnessEvaluator[G],
) -> list[float]:
    """Score individuals with a fitness evaluator, checking the contract.

    Raises:
        ValidationError: If the evaluator returns the wrong number of values.
    """
    fitness_values = list(fitness.evaluate(individuals))
    if len(fitness_values) != len(individuals):
        raise ValidationError(
            "fitness values is not equal to the number of individuals",
            field="fitness_values",
            value=len(fitness_values),
            details={"individuals": len(individuals)},
        )
    return fitness_values


class Population[G: Hashable]:
    """A collection of evaluated individuals bounded by a size limit."""

    def __init__(
        self,
        individuals: Sequence[Individual[G]],
        fitness_values: Sequence[float],
        size_limit: int,
    ) -> None:
        self._individuals: list[Individual[G]] = []
        self._fitness_values: list[float] = []
        self._size_limit = size_limit
        self.assign(individuals, fitness_values)

    @classmethod
    def build(
        cls,
        individuals: Sequence[Individual[G]],
        fitness: FitnessEvaluator[G],
    ) -> Population[G]:
        """Build a population scored by fitness.

        The size limit is set to the number of individuals; use
        with_size_limit() to change it.
        """
        fitness_values = evaluate_individuals(individuals, fitness)
        return cls(individuals, fitness_values, size_limit=len(individuals))

    def with_size_limit(self, limit: int) -> Population[G]:
        """Set the population size limit and return self."""
        self._size_limit = limit
        return self

    @property
    def individuals(self) -> Sequence[Individual[G]]:
        return self._individuals

    @property
    def fitness_values(self) -> Sequence[float]:
        return self._fitness_values

    @property
    def size_limit(self) -> int:
        return self._size_limit

    def size(self) -> int:
        return len(self._individuals)

    def __len__(self) -> int:
        return len(self._individuals)

    def is_oversized(self) -> bool:
        """Return True if there are more individuals than the size limit."""
        return self.size() > self._size_limit

    def assign(
        self,
        individuals: Sequence[Individual[G]],
        fitness_values: Sequence[float],
    ) -> None:
        """Replace the whole individual and fitness collections at once.

        Raises:
            ValidationError: If the two collections differ in length.
        """
        if len(individuals) != len(fitness_values):
            raise ValidationError(
                "individuals and fitness values must be aligned",
                field="fitness_values",
                value=len(fitness_values),
                details={"individuals": len(individuals)},
            )
        self._individuals = list(individuals)
        self._fitness_values = [float(f) for f in fitness_values]

    def evaluate_with(self, fitness: FitnessEvaluator[G]) -> None:
        """Re-score every individual with fitness."""
        self._fitness_values = evaluate_individuals(self._individuals, fitness)

    def weight_with(self, weight: float) -> None:
        """Scale every fitness value by weight."""
        self._fitness_values = [f * weight for f in self._fitness_values]

    def members(self) -> list[Member[G]]:
        """Return a member view of every individual, in population order."""
        return [Member(self, i) for i in range(self.size())]

    def best_member(self) -> Member[G] | None:
        """Return the member with the highest fitness, or None if empty."""
        found = imax(self._fitness_values)
        if found is None:
            return None
        return Member(self, found[0])

    def survive(self) -> int:
        """Drop the worst individuals until the size limit is respected.

        Returns:
            The number of individuals removed.
        """
        if not self.is_oversized():
            return 0

        n_old = self.size()
        keep = sort_members_by_fitness(self.members())[: self._size_limit]
        self.assign(
            [m.individual for m in keep],
            [m.fitness_value for m in keep],
        )
        return n_old - self.size()

    def __repr__(self) -> str:
        return f"Population(size={self.size()}, size_limit={self._size_limit})"
