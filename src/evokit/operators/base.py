"""Operator contracts.

Operators are plain objects matched structurally; any class with the right
method signature can be plugged into a breeder or engine without inheriting
from anything here.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
import random
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from evokit.evolution.population import Member, Population


@runtime_checkable
class SelectionOperator[G: Hashable](Protocol):
    """Chooses parent members from a population."""

    def select(self, population: Population[G], rng: random.Random) -> list[Member[G]]:
        """Return the selected members; repeats are allowed where noted."""
        ...


@runtime_checkable
class VariationOperator[G: Hashable](Protocol):
    """Produces child genomes from selected parents."""

    def breed(self, parents: Sequence[Member[G]], rng: random.Random) -> list[G]:
        """Return the children bred from parents."""
        ...


@runtime_checkable
class Mutable(Hashable, Protocol):
    """A genome that can produce a mutated copy of itself."""

    def mutate(self, n: int, rng: random.Random) -> Self:
        """Return a copy with n distinct positions changed."""
        ...
