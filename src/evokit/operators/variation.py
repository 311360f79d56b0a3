"""Variation operators: crossover and mutation.

Crossover operators work on sequence genomes (tuple subclasses such as
Binary) and rebuild children with the parent's own type. FlipBitMutation
delegates to the genome's mutate() method.
"""

from __future__ import annotations

from collections.abc import Sequence
import random
from typing import Any

from evokit.core.errors import ConfigError, ValidationError
from evokit.evolution.population import Member, sort_members_by_fitness
from evokit.operators.base import Mutable


def _parent_genomes[G: tuple[Any, ...]](
    parents: Sequence[Member[G]], arity: int, operator: str
) -> list[G]:
    """Return the parent genomes, checking arity and equal length.

    Raises:
        ConfigError: If the number of parents is not arity.
        ValidationError: If the parent genomes differ in length.
    """
    if len(parents) != arity:
        raise ConfigError(
            f"{operator} requires exactly {arity} parents, got {len(parents)}",
            config_key="selection.n",
            details={"arity": arity, "parents": len(parents)},
        )
    genomes = [m.genome for m in parents]
    lengths = {len(g) for g in genomes}
    if len(lengths) != 1:
        raise ValidationError(
            f"{operator} requires parent genomes of equal length",
            field="genome",
            value=sorted(lengths),
        )
    return genomes


class OnePointCrossover:
    """Swap the element at one random position between two parents.

    Only the single element at the crossover index changes hands, not the
    tail after it. Both children are returned.
    """

    arity = 2

    def breed[G: tuple[Any, ...]](
        self, parents: Sequence[Member[G]], rng: random.Random
    ) -> list[G]:
        g1, g2 = _parent_genomes(parents, self.arity, "one-point crossover")
        if len(g1) == 0:
            return [g1, g2]

        i = rng.randrange(len(g1))
        c1, c2 = list(g1), list(g2)
        c1[i], c2[i] = c2[i], c1[i]
        return [type(g1)(c1), type(g2)(c2)]

    def __repr__(self) -> str:
        return "OnePointCrossover()"


class TriadicCrossover:
    """Exchange conserved loci among three parents.

    Parents are ranked by ascending fitness, NaN fitness first. Wherever the
    two worst-ranked parents agree, the values of the second and third
    parents are swapped.
    The two modified genomes are returned as children.
    """

    arity = 3

    def breed[G: tuple[Any, ...]](
        self, parents: Sequence[Member[G]], rng: random.Random
    ) -> list[G]:
        _parent_genomes(parents, self.arity, "triadic crossover")
        ranked = sort_members_by_fitness(parents)[::-1]
        g0, g1, g2 = (m.genome for m in ranked)

        c1, c2 = list(g1), list(g2)
        for i, (a, b) in enumerate(zip(g0, g1, strict=True)):
            if a == b:
                c1[i], c2[i] = c2[i], c1[i]
        return [type(g1)(c1), type(g2)(c2)]

    def __repr__(self) -> str:
        return "TriadicCrossover()"


class FlipBitMutation:
    """Flip mutation_size distinct random bits of every parent genome."""

    def __init__(self, mutation_size: int = 1) -> None:
        if mutation_size < 1:
            raise ConfigError(
                f"mutation_size must be at least 1, got {mutation_size}",
                config_key="mutation_size",
            )
        self.mutation_size = mutation_size

    def mutate[M: Mutable](self, genome: M, rng: random.Random) -> M:
        """Return a mutated copy of genome."""
        return genome.mutate(self.mutation_size, rng)

    def breed[M: Mutable](self, parents: Sequence[Member[M]], rng: random.Random) -> list[M]:
        return [self.mutate(m.genome, rng) for m in parents]

    def __repr__(self) -> str:
        return f"FlipBitMutation(mutation_size={self.mutation_size})"
