"""Bit-string genomes and the OneMax objective."""

from __future__ import annotations

from collections.abc import Iterable
import random

from evokit.core.errors import ValidationError


class Binary(tuple[bool, ...]):
    """An immutable bit string.

    Binary is a tuple of bools, so it hashes and compares by value and can
    be rebuilt from any iterable of bools: Binary([True, False]).
    """

    __slots__ = ()

    @classmethod
    def from_str(cls, s: str) -> Binary:
        """Parse a string of 0 and 1 characters, e.g. "1011".

        Raises:
            ValidationError: If s holds any other character.
        """
        bits = []
        for c in s:
            if c == "1":
                bits.append(True)
            elif c == "0":
                bits.append(False)
            else:
                raise ValidationError(f"bad char: {c!r}", field="genome", value=s)
        return cls(bits)

    @classmethod
    def draw(cls, length: int, rng: random.Random) -> Binary:
        """Draw a uniformly random bit string of the given length."""
        return cls(rng.random() < 0.5 for _ in range(length))

    def flip(self, positions: Iterable[int]) -> Binary:
        """Return a copy with the bits at positions inverted."""
        bits = list(self)
        for i in positions:
            bits[i] = not bits[i]
        return type(self)(bits)

    def mutate(self, n: int, rng: random.Random) -> Binary:
        """Return a copy with n distinct random bits flipped.

        Raises:
            ValidationError: If n exceeds the genome length.
        """
        if n > len(self):
            raise ValidationError(
                f"cannot flip {n} distinct bits of a {len(self)}-bit genome",
                field="mutation_size",
                value=n,
            )
        return self.flip(rng.sample(range(len(self)), n))

    def count_ones(self) -> int:
        return sum(self)

    def __str__(self) -> str:
        return "".join("1" if b else "0" for b in self)

    def __repr__(self) -> str:
        return f"Binary('{self}')"


class OneMax:
    """Objective value = number of set bits."""

    def evaluate(self, genome: Binary) -> float:
        return float(genome.count_ones())
