"""Parent selection operators.

Every operator takes a population and a random source and returns a list of
member views into that population. Nothing is copied, and no member is ever
fabricated: the output always refers to individuals already present.

Proportionate operators (roulette wheel, stochastic universal sampling) use
fitness values directly as weights, so fitness must be non-negative. When
every weight is zero, all members are equally fit and are drawn uniformly.

References:
    https://en.wikipedia.org/wiki/Fitness_proportionate_selection
    https://en.wikipedia.org/wiki/Stochastic_universal_sampling
"""

from __future__ import annotations

import bisect
from collections.abc import Hashable, Sequence
from itertools import accumulate
import math
import random

from evokit.core.errors import ConfigError, ValidationError
from evokit.evolution.population import Member, Population, sort_members_by_fitness


def _check_count(n: int) -> None:
    if n < 1:
        raise ConfigError(
            f"selection count must be at least 1, got {n}",
            config_key="n",
        )


def _check_capacity[G: Hashable](n: int, population: Population[G], operator: str) -> None:
    if n > population.size():
        raise ConfigError(
            f"{operator}: cannot select {n} members from a population of "
            f"{population.size()}",
            config_key="n",
            details={"n": n, "population_size": population.size()},
        )


def _check_not_empty[G: Hashable](population: Population[G], operator: str) -> None:
    if population.size() == 0:
        raise ValidationError(
            f"{operator}: cannot select from an empty population",
            field="population",
            value=0,
        )


def _weights[G: Hashable](members: Sequence[Member[G]]) -> list[float]:
    """Return selection weights for members, validating fitness.

    Raises:
        ValidationError: If any fitness value is negative or NaN.
    """
    weights = [m.fitness_value for m in members]
    for m, w in zip(members, weights, strict=True):
        if math.isnan(w) or w < 0.0:
            raise ValidationError(
                "fitness-proportionate selection requires non-negative fitness",
                field="fitness_value",
                value=w,
                details={"genome": str(m.genome)},
            )
    return weights


def _weighted_index(weights: Sequence[float], rng: random.Random) -> int:
    """Draw one index with probability proportional to its weight."""
    if sum(weights) <= 0.0:
        return rng.randrange(len(weights))
    return rng.choices(range(len(weights)), weights=weights, k=1)[0]


class ElitistSelection:
    """Select the n fittest members.

    Deterministic; the random source is ignored. The result is sorted by
    descending fitness with NaN fitness last.
    """

    def __init__(self, n: int) -> None:
        _check_count(n)
        self.n = n

    def select[G: Hashable](
        self, population: Population[G], rng: random.Random
    ) -> list[Member[G]]:
        _check_capacity(self.n, population, "elitist")
        return sort_members_by_fitness(population.members())[: self.n]

    def __repr__(self) -> str:
        return f"ElitistSelection({self.n})"


class RouletteWheelSelection:
    """Fitness-proportionate selection.

    With repetition every draw is independent, so the same member may be
    chosen several times. Without repetition a chosen member leaves the pool
    and the next draw is weighted over the members that remain.
    """

    def __init__(self, n: int, *, allow_repetition: bool = True) -> None:
        _check_count(n)
        self.n = n
        self.allow_repetition = allow_repetition

    def select[G: Hashable](
        self, population: Population[G], rng: random.Random
    ) -> list[Member[G]]:
        _check_not_empty(population, "roulette wheel")
        if not self.allow_repetition:
            _check_capacity(self.n, population, "roulette wheel")

        choices = population.members()
        weights = _weights(choices)

        selected: list[Member[G]] = []
        for _ in range(self.n):
            i = _weighted_index(weights, rng)
            selected.append(choices[i])
            if not self.allow_repetition:
                del choices[i]
                del weights[i]
        return selected

    def __repr__(self) -> str:
        return f"RouletteWheelSelection({self.n}, allow_repetition={self.allow_repetition})"


class TournamentSelection:
    """Deterministic tournament over a shuffled partition.

    Members are shuffled and split into n chunks of floor(size / n) members;
    the fittest member of each chunk wins. Leftover members join the last
    chunk, so every member competes exactly once and exactly n winners come
    back.
    """

    def __init__(self, n: int) -> None:
        _check_count(n)
        self.n = n

    def select[G: Hashable](
        self, population: Population[G], rng: random.Random
    ) -> list[Member[G]]:
        _check_capacity(self.n, population, "tournament")

        members = population.members()
        rng.shuffle(members)

        tsize = len(members) // self.n
        winners: list[Member[G]] = []
        for k in range(self.n):
            stop = (k + 1) * tsize if k < self.n - 1 else len(members)
            chunk = members[k * tsize : stop]
            winners.append(sort_members_by_fitness(chunk)[0])
        return winners

    def __repr__(self) -> str:
        return f"TournamentSelection({self.n})"


class StochasticUniversalSampling:
    """Fitness-proportionate selection with evenly spaced pointers.

    Members are laid out along the cumulative-fitness axis in descending
    fitness order. A single random offset in [0, fsum / n) places n pointers
    fsum / n apart, and each pointer picks the member whose segment it falls
    in. Compared with n independent roulette draws this keeps the number of
    picks per member close to its expected value.
    """

    def __init__(self, n: int) -> None:
        _check_count(n)
        self.n = n

    def select[G: Hashable](
        self, population: Population[G], rng: random.Random
    ) -> list[Member[G]]:
        _check_not_empty(population, "stochastic universal sampling")

        members = sort_members_by_fitness(population.members())
        weights = _weights(members)
        if sum(weights) <= 0.0:
            weights = [1.0] * len(members)

        cumulative = list(accumulate(weights))
        fsum = cumulative[-1]
        step = fsum / self.n
        start = rng.random() * step

        last = len(members) - 1
        selected: list[Member[G]] = []
        for k in range(self.n):
            point = start + k * step
            i = bisect.bisect_right(cumulative, point)
            selected.append(members[min(i, last)])
        return selected

    def __repr__(self) -> str:
        return f"StochasticUniversalSampling({self.n})"


class RandomSelection:
    """Uniform selection, with or without replacement."""

    def __init__(self, n: int, *, allow_repetition: bool = False) -> None:
        _check_count(n)
        self.n = n
        self.allow_repetition = allow_repetition

    def select[G: Hashable](
        self, population: Population[G], rng: random.Random
    ) -> list[Member[G]]:
        _check_not_empty(population, "random")
        members = population.members()
        if self.allow_repetition:
            return [rng.choice(members) for _ in range(self.n)]

        _check_capacity(self.n, population, "random")
        return rng.sample(members, self.n)

    def __repr__(self) -> str:
        return f"RandomSelection({self.n}, allow_repetition={self.allow_repetition})"
