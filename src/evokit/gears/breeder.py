"""Breeder: selection plus variation, with optional mutation."""

from __future__ import annotations

from collections.abc import Hashable
import random
from typing import Any, Protocol, runtime_checkable

import structlog

from evokit.core.errors import ConfigError, ValidationError
from evokit.evolution.population import Population
from evokit.operators.base import SelectionOperator, VariationOperator
from evokit.operators.variation import FlipBitMutation

log = structlog.get_logger()


@runtime_checkable
class Breeder[G: Hashable](Protocol):
    """Produces new genomes from a population."""

    def breed(self, m: int, population: Population[G], rng: random.Random) -> list[G]:
        """Return exactly m new genomes."""
        ...


class GeneticBreeder[G: Hashable]:
    """Breed genomes by repeated selection and variation.

    Parents are selected and varied until at least m children exist; the
    batch is then cut to exactly m. Each child is then mutated with
    probability mutation_probability. With per_genome_mutation=False a single
    draw decides for the whole batch instead: every child is mutated when
    the draw does not exceed mutation_probability, none otherwise.

    Example:
        breeder = GeneticBreeder(
            ElitistSelection(2),
            OnePointCrossover(),
            mutation_probability=0.5,
        )
        genomes = breeder.breed(10, population, rng)
    """

    def __init__(
        self,
        selection: SelectionOperator[G],
        variation: VariationOperator[G],
        *,
        mutation_probability: float = 0.0,
        mutation: FlipBitMutation | None = None,
        per_genome_mutation: bool = True,
    ) -> None:
        """Initialize the breeder.

        Args:
            selection: Operator choosing parents for each variation call.
            variation: Operator producing children from those parents.
            mutation_probability: Chance of mutating a child, in [0, 1].
            mutation: Mutation applied to children. Defaults to a single
                bit flip.
            per_genome_mutation: Draw once per child instead of once per
                batch.

        Raises:
            ConfigError: If mutation_probability is outside [0, 1].
        """
        if not 0.0 <= mutation_probability <= 1.0:
            raise ConfigError(
                f"mutation_probability must lie in [0, 1], got {mutation_probability}",
                config_key="mutation_probability",
            )
        self.selection = selection
        self.variation = variation
        self.mutation_probability = mutation_probability
        self.mutation = mutation if mutation is not None else FlipBitMutation()
        self.per_genome_mutation = per_genome_mutation

    def breed(self, m: int, population: Population[G], rng: random.Random) -> list[G]:
        """Breed exactly m new genomes from population.

        Raises:
            ValidationError: If the variation operator returns no children.
        """
        genomes: list[G] = []
        while len(genomes) < m:
            parents = self.selection.select(population, rng)
            children = self.variation.breed(parents, rng)
            if not children:
                raise ValidationError(
                    "variation operator produced no children",
                    field="variation",
                    value=repr(self.variation),
                )
            genomes.extend(children)
        del genomes[m:]

        mutated = self._mutate(genomes, rng)
        log.debug("breeder.breed.completed", bred=len(genomes), mutated=mutated)
        return genomes

    def _mutate(self, genomes: list[G], rng: random.Random) -> int:
        if self.mutation_probability <= 0.0 or not genomes:
            return 0

        if self.per_genome_mutation:
            picked = [i for i in range(len(genomes)) if rng.random() < self.mutation_probability]
        elif rng.random() <= self.mutation_probability:
            picked = list(range(len(genomes)))
        else:
            picked = []

        for i in picked:
            genome: Any = genomes[i]
            genomes[i] = self.mutation.mutate(genome, rng)
        return len(picked)

    def __repr__(self) -> str:
        return (
            f"GeneticBreeder({self.selection!r}, {self.variation!r}, "
            f"mutation_probability={self.mutation_probability})"
        )
