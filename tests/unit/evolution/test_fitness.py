"""Unit tests for evokit.evolution.fitness module."""

import math

import pytest

from evokit.core.errors import ConfigError
from evokit.encoding.binary import Binary
from evokit.evolution.fitness import (
    BOLTZMANN,
    EnergyUnit,
    FitnessEvaluator,
    Maximize,
    Minimize,
    MinimizeEnergy,
    parse_energy_unit,
)
from evokit.evolution.individual import Individual
from evokit.evolution.population import Population


def individuals(*values: float) -> list[Individual[Binary]]:
    return [
        Individual(genome=Binary.from_str(format(i, "04b")), objective_value=v)
        for i, v in enumerate(values)
    ]


class TestMaximize:
    """Test the Maximize policy."""

    def test_fitness_is_offset_from_minimum(self) -> None:
        """fitness = objective - min(objective)."""
        assert Maximize().evaluate(individuals(3.0, 1.0, 5.0)) == [2.0, 0.0, 4.0]

    def test_all_fitness_non_negative_and_worst_is_zero(self) -> None:
        """The worst individual scores zero and nothing is negative."""
        fitness = Maximize().evaluate(individuals(-2.0, 7.5, 0.0, -2.0))
        assert min(fitness) == 0.0
        assert all(f >= 0.0 for f in fitness)

    def test_empty_input_returns_empty(self) -> None:
        """Empty input is not an error."""
        assert Maximize().evaluate([]) == []

    def test_all_nan_objectives_give_nan_fitness(self) -> None:
        """A pool with no usable objective keeps one NaN fitness per individual."""
        fitness = Maximize().evaluate(individuals(math.nan, math.nan))
        assert len(fitness) == 2
        assert all(math.isnan(f) for f in fitness)

    def test_satisfies_protocol(self) -> None:
        """Maximize is a structural FitnessEvaluator."""
        assert isinstance(Maximize(), FitnessEvaluator)


class TestMinimize:
    """Test the Minimize policy."""

    def test_fitness_is_offset_from_maximum(self) -> None:
        """fitness = max(objective) - objective."""
        assert Minimize().evaluate(individuals(3.0, 1.0, 5.0)) == [2.0, 4.0, 0.0]

    def test_best_has_largest_fitness(self) -> None:
        """The smallest objective value gets the largest fitness."""
        fitness = Minimize().evaluate(individuals(3.0, 1.0, 5.0))
        assert fitness.index(max(fitness)) == 1

    def test_empty_input_returns_empty(self) -> None:
        """Empty input is not an error."""
        assert Minimize().evaluate([]) == []

    def test_all_nan_objectives_give_nan_fitness(self) -> None:
        """NaN objectives are carried through rather than dropped."""
        fitness = Minimize().evaluate(individuals(math.nan, math.nan, math.nan))
        assert len(fitness) == 3
        assert all(math.isnan(f) for f in fitness)


class TestEnergyUnit:
    """Test energy unit conversions."""

    def test_conversions(self) -> None:
        """Each unit converts to kJ/mol with the expected factor."""
        assert EnergyUnit.EV.conversion == 96.0
        assert EnergyUnit.AU.conversion == 2625.5
        assert EnergyUnit.KCAL.conversion == 4.184
        assert EnergyUnit.KJ.conversion == 1.0

    def test_parse_by_name(self) -> None:
        """Units parse from their names."""
        assert parse_energy_unit("kcal") is EnergyUnit.KCAL

    def test_unknown_unit(self) -> None:
        """Unknown units are configuration errors."""
        with pytest.raises(ConfigError):
            parse_energy_unit("hartree")


class TestMinimizeEnergy:
    """Test the annealed Boltzmann policy."""

    @pytest.mark.parametrize("temperature", [0.0, -10.0])
    def test_non_positive_temperature_rejected(self, temperature: float) -> None:
        """Temperature must be positive."""
        with pytest.raises(ConfigError):
            MinimizeEnergy(temperature)

    def test_annealer_spans_ten_times_temperature(self) -> None:
        """The schedule runs from 10x the temperature down to it."""
        policy = MinimizeEnergy(300.0)
        assert policy.annealer.temperature_high == 3000.0
        assert policy.annealer.temperature_low == 300.0

    def test_first_evaluation_uses_first_annealed_temperature(self) -> None:
        """fitness = exp(conv * (emin - e) / (T * kB)) with T from the schedule."""
        policy = MinimizeEnergy(300.0)
        fitness = policy.evaluate(individuals(0.0, 1.0))

        temperature = 3000.0 * 0.92
        expected = math.exp(96.0 * (0.0 - 1.0) / (temperature * BOLTZMANN))
        assert fitness[0] == pytest.approx(1.0)
        assert fitness[1] == pytest.approx(expected)

    def test_lowest_energy_scores_one(self) -> None:
        """The minimum-energy individual always scores exactly 1."""
        fitness = MinimizeEnergy(500.0, "kJ").evaluate(individuals(-3.0, -5.0, 2.0))
        assert fitness[1] == 1.0
        assert all(0.0 <= f <= 1.0 for f in fitness)

    def test_selectivity_sharpens_over_time(self) -> None:
        """Later evaluations penalize higher energies more strongly."""
        policy = MinimizeEnergy(300.0)
        pool = individuals(0.0, 0.5)
        early = policy.evaluate(pool)[1]
        late = policy.evaluate(pool)[1]
        assert late < early

    def test_temperature_freezes_when_schedule_exhausted(self) -> None:
        """After the schedule ends T stays at the given temperature."""
        policy = MinimizeEnergy(300.0)
        temperatures = [policy.next_temperature() for _ in range(40)]
        assert temperatures[-1] == 300.0
        assert temperatures[-2] == 300.0
        assert temperatures[0] > temperatures[10] > 300.0

    def test_with_energy_unit(self) -> None:
        """with_energy_unit() switches the conversion and returns self."""
        policy = MinimizeEnergy(300.0)
        assert policy.with_energy_unit("au") is policy
        assert policy.energy_unit is EnergyUnit.AU

    def test_empty_input_returns_empty(self) -> None:
        """Empty input does not advance the schedule."""
        policy = MinimizeEnergy(300.0)
        assert policy.evaluate([]) == []
        assert policy.annealer.temperature is None

    def test_all_nan_energies_give_nan_fitness(self) -> None:
        """Unscorable energies yield NaN fitness without advancing the schedule."""
        policy = MinimizeEnergy(300.0)
        fitness = policy.evaluate(individuals(math.nan, math.nan))
        assert len(fitness) == 2
        assert all(math.isnan(f) for f in fitness)
        assert policy.annealer.temperature is None


class TestAllNanPopulation:
    """Test building populations whose objectives are all NaN."""

    @pytest.mark.parametrize("policy", [Maximize(), Minimize(), MinimizeEnergy(300.0)])
    def test_build_keeps_every_individual(
        self, policy: Maximize | Minimize | MinimizeEnergy
    ) -> None:
        """Population.build() aligns one NaN fitness with each individual."""
        pool = [
            Individual(genome=Binary.from_str("1"), objective_value=math.nan),
            Individual(genome=Binary.from_str("0"), objective_value=math.nan),
        ]
        population = Population.build(pool, policy)
        assert population.size() == 2
        assert all(math.isnan(f) for f in population.fitness_values)
        assert population.best_member() is None
