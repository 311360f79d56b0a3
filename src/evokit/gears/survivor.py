"""Survivor: prune an oversized population back to its size limit."""

from __future__ import annotations

from collections.abc import Hashable
import random
from typing import Protocol, runtime_checkable

import structlog

from evokit.evolution.population import Member, Population, sort_members_by_fitness

log = structlog.get_logger()


@runtime_checkable
class SurvivalOperator[G: Hashable](Protocol):
    """Reduces a population to its size limit in place."""

    def survive(self, population: Population[G], rng: random.Random) -> int:
        """Prune population and return the number of individuals removed."""
        ...


class Survivor:
    """Keep the fittest individuals, optionally dropping duplicate genomes.

    Pruning only happens when the population is oversized. Duplicates are
    removed first, keeping the first copy of each genome, then the fittest
    size_limit members survive.
    """

    def __init__(self, *, remove_duplicates: bool = False) -> None:
        self.remove_duplicates = remove_duplicates

    def survive[G: Hashable](self, population: Population[G], rng: random.Random) -> int:
        if not population.is_oversized():
            return 0

        n_old = population.size()
        members: list[Member[G]] = population.members()
        if self.remove_duplicates:
            seen: set[G] = set()
            unique: list[Member[G]] = []
            for m in members:
                if m.genome not in seen:
                    seen.add(m.genome)
                    unique.append(m)
            members = unique

        keep = sort_members_by_fitness(members)[: population.size_limit]
        population.assign(
            [m.individual for m in keep],
            [m.fitness_value for m in keep],
        )

        removed = n_old - population.size()
        log.debug(
            "survivor.population.pruned",
            removed=removed,
            size=population.size(),
            size_limit=population.size_limit,
        )
        return removed

    def __repr__(self) -> str:
        return f"Survivor(remove_duplicates={self.remove_duplicates})"
