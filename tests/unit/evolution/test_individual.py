"""Unit tests for evokit.evolution.individual module."""

from dataclasses import FrozenInstanceError
import threading

import pytest

from evokit.encoding.binary import Binary, OneMax
from evokit.evolution.individual import Individual, ObjectiveEvaluator, create_individuals


class CountingEvaluator:
    """OneMax evaluator that records every genome it scores."""

    def __init__(self) -> None:
        self.calls: list[Binary] = []
        self._lock = threading.Lock()

    def evaluate(self, genome: Binary) -> float:
        with self._lock:
            self.calls.append(genome)
        return float(sum(genome))


class FailingEvaluator:
    def evaluate(self, genome: Binary) -> float:
        raise RuntimeError("evaluator crashed")


class TestIndividual:
    """Test the Individual value type."""

    def test_new_evaluates_genome(self) -> None:
        """Individual.new scores the genome with the evaluator."""
        indv = Individual.new(Binary.from_str("1101"), OneMax())
        assert indv.objective_value == 3.0
        assert str(indv.genome) == "1101"

    def test_is_immutable(self) -> None:
        """Individuals cannot be modified after construction."""
        indv = Individual(genome=Binary.from_str("1"), objective_value=1.0)
        with pytest.raises(FrozenInstanceError):
            indv.objective_value = 2.0  # type: ignore[misc]

    def test_equal_by_value(self) -> None:
        """Two individuals with the same genome and value are equal."""
        a = Individual(genome=Binary.from_str("10"), objective_value=1.0)
        b = Individual(genome=Binary.from_str("10"), objective_value=1.0)
        assert a == b

    def test_onemax_satisfies_protocol(self) -> None:
        """OneMax is a structural ObjectiveEvaluator."""
        assert isinstance(OneMax(), ObjectiveEvaluator)


class TestCreateIndividuals:
    """Test create_individuals."""

    def test_duplicates_evaluated_once(self) -> None:
        """Identical genomes are scored a single time."""
        evaluator = CountingEvaluator()
        genomes = [Binary.from_str(s) for s in ("101", "011", "101", "101")]
        individuals = create_individuals(evaluator, genomes)
        assert len(individuals) == 2
        assert len(evaluator.calls) == 2

    def test_keeps_first_seen_order(self) -> None:
        """Distinct genomes come back in first-seen order."""
        genomes = [Binary.from_str(s) for s in ("111", "000", "111", "010")]
        individuals = create_individuals(OneMax(), genomes)
        assert [str(i.genome) for i in individuals] == ["111", "000", "010"]
        assert [i.objective_value for i in individuals] == [3.0, 0.0, 1.0]

    def test_parallel_matches_sequential(self) -> None:
        """Thread-pool evaluation pairs every genome with its own value."""
        genomes = [Binary.from_str(format(i, "06b")) for i in range(40)]
        sequential = create_individuals(OneMax(), genomes)
        parallel = create_individuals(OneMax(), genomes, max_workers=4)
        assert parallel == sequential

    def test_empty_input(self) -> None:
        """No genomes means no individuals."""
        assert create_individuals(OneMax(), []) == []

    def test_evaluator_errors_propagate(self) -> None:
        """Evaluator exceptions are not swallowed."""
        with pytest.raises(RuntimeError, match="evaluator crashed"):
            create_individuals(FailingEvaluator(), [Binary.from_str("1")])
