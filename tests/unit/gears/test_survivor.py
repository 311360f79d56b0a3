"""Unit tests for evokit.gears.survivor module."""

from collections.abc import Callable
import random

from evokit.encoding.binary import Binary, OneMax
from evokit.evolution.fitness import Maximize
from evokit.evolution.individual import Individual
from evokit.evolution.population import Population
from evokit.gears.survivor import SurvivalOperator, Survivor

PopulationFactory = Callable[..., Population[Binary]]


def with_duplicates(*genomes: str) -> Population[Binary]:
    """Build a population keeping repeated genomes."""
    individuals = [Individual.new(Binary.from_str(g), OneMax()) for g in genomes]
    return Population.build(individuals, Maximize())


class TestSurvivor:
    """Test Survivor.survive()."""

    def test_protocol(self) -> None:
        """Survivor satisfies the survival protocol."""
        assert isinstance(Survivor(), SurvivalOperator)

    def test_within_limit_is_noop(
        self, make_population: PopulationFactory, rng: random.Random
    ) -> None:
        """A population at its limit is left alone."""
        population = make_population("0001", "0011", "0111")
        assert Survivor().survive(population, rng) == 0
        assert population.size() == 3

    def test_keeps_fittest(self, make_population: PopulationFactory, rng: random.Random) -> None:
        """The fittest size_limit members survive, best first."""
        population = make_population("0001", "1111", "0000", "0111", "0011").with_size_limit(2)

        removed = Survivor().survive(population, rng)

        assert removed == 3
        assert [str(i.genome) for i in population.individuals] == ["1111", "0111"]
        assert list(population.fitness_values) == [4.0, 3.0]

    def test_duplicates_kept_by_default(self, rng: random.Random) -> None:
        """Without deduplication copies compete like any other member."""
        population = with_duplicates("1111", "1111", "0011", "0001").with_size_limit(2)
        Survivor().survive(population, rng)
        assert [str(i.genome) for i in population.individuals] == ["1111", "1111"]

    def test_remove_duplicates(self, rng: random.Random) -> None:
        """With deduplication each genome survives at most once."""
        population = with_duplicates("1111", "1111", "0011", "0001").with_size_limit(2)

        removed = Survivor(remove_duplicates=True).survive(population, rng)

        assert removed == 2
        assert [str(i.genome) for i in population.individuals] == ["1111", "0011"]

    def test_dedup_may_leave_population_short(self, rng: random.Random) -> None:
        """Dropping copies can shrink the population below its limit."""
        population = with_duplicates("1111", "1111", "1111", "0001").with_size_limit(3)
        Survivor(remove_duplicates=True).survive(population, rng)
        assert population.size() == 2
