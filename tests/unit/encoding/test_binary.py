"""Unit tests for evokit.encoding.binary module."""

import random

import pytest

from evokit.core.errors import ValidationError
from evokit.encoding.binary import Binary, OneMax
from evokit.evolution.individual import ObjectiveEvaluator


class TestBinary:
    """Test the Binary genome."""

    def test_from_str(self) -> None:
        """Bit strings parse into bools, most significant first."""
        genome = Binary.from_str("1011")
        assert tuple(genome) == (True, False, True, True)
        assert str(genome) == "1011"
        assert repr(genome) == "Binary('1011')"

    def test_from_str_bad_char(self) -> None:
        """Only 0 and 1 are accepted."""
        with pytest.raises(ValidationError, match="bad char"):
            Binary.from_str("10x1")

    def test_empty(self) -> None:
        """The empty string is a valid zero-length genome."""
        assert len(Binary.from_str("")) == 0

    def test_hash_and_equality(self) -> None:
        """Genomes compare and hash by value."""
        assert Binary.from_str("101") == Binary([True, False, True])
        assert len({Binary.from_str("101"), Binary.from_str("101")}) == 1

    def test_flip(self) -> None:
        """flip() returns a new genome with the given bits inverted."""
        genome = Binary.from_str("0000")
        flipped = genome.flip([0, 3])
        assert str(flipped) == "1001"
        assert isinstance(flipped, Binary)
        assert str(genome) == "0000"

    def test_mutate(self, rng: random.Random) -> None:
        """mutate() flips n distinct bits."""
        genome = Binary.from_str("1111111111")
        assert genome.mutate(4, rng).count_ones() == 6

    def test_mutate_too_many(self, rng: random.Random) -> None:
        """n may not exceed the genome length."""
        with pytest.raises(ValidationError):
            Binary.from_str("11").mutate(3, rng)

    def test_draw(self) -> None:
        """draw() is reproducible for a seeded source."""
        a = Binary.draw(16, random.Random(5))
        b = Binary.draw(16, random.Random(5))
        assert len(a) == 16
        assert a == b


class TestOneMax:
    """Test the OneMax objective."""

    @pytest.mark.parametrize(("bits", "expected"), [("", 0.0), ("000", 0.0), ("10110", 3.0)])
    def test_counts_ones(self, bits: str, expected: float) -> None:
        """The objective value is the number of set bits."""
        assert OneMax().evaluate(Binary.from_str(bits)) == expected

    def test_protocol(self) -> None:
        """OneMax satisfies the objective evaluator protocol."""
        assert isinstance(OneMax(), ObjectiveEvaluator)
