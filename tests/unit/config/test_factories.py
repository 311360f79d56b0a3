"""Unit tests for evokit.config.factories module."""

import pytest

from evokit.config.factories import (
    build_breeder,
    build_fitness,
    build_logging_config,
    build_selection,
    build_survivor,
    build_terminators,
    build_variation,
)
from evokit.config.models import (
    BreederConfig,
    EvokitConfig,
    FitnessConfig,
    LoggingConfig,
    SelectionConfig,
    SurvivorConfig,
    TerminationConfig,
    VariationConfig,
)
from evokit.evolution.fitness import EnergyUnit, Maximize, Minimize, MinimizeEnergy
from evokit.evolution.termination import MaxGeneration, RunningMean
from evokit.observability.logging import LogMode
from evokit.operators.selection import (
    ElitistSelection,
    RandomSelection,
    RouletteWheelSelection,
    StochasticUniversalSampling,
    TournamentSelection,
)
from evokit.operators.variation import FlipBitMutation, OnePointCrossover, TriadicCrossover


class TestBuildSelection:
    """Test build_selection()."""

    @pytest.mark.parametrize(
        ("method", "cls"),
        [
            ("elitist", ElitistSelection),
            ("roulette_wheel", RouletteWheelSelection),
            ("tournament", TournamentSelection),
            ("stochastic_universal", StochasticUniversalSampling),
            ("random", RandomSelection),
        ],
    )
    def test_methods(self, method: str, cls: type) -> None:
        """Each method name maps to its operator."""
        operator = build_selection(SelectionConfig(method=method, n=3))  # type: ignore[arg-type]
        assert isinstance(operator, cls)
        assert operator.n == 3

    def test_repetition_flag(self) -> None:
        """allow_repetition is passed through."""
        operator = build_selection(SelectionConfig(method="random", allow_repetition=False))
        assert operator.allow_repetition is False


class TestBuildVariation:
    """Test build_variation()."""

    def test_methods(self) -> None:
        """Each method name maps to its operator."""
        assert isinstance(build_variation(VariationConfig()), OnePointCrossover)
        assert isinstance(build_variation(VariationConfig(method="triadic")), TriadicCrossover)
        mutation = build_variation(VariationConfig(method="flip_bit", mutation_size=2))
        assert isinstance(mutation, FlipBitMutation)
        assert mutation.mutation_size == 2


class TestBuildFitness:
    """Test build_fitness()."""

    def test_methods(self) -> None:
        """Each fitness method maps to its policy."""
        assert isinstance(build_fitness(FitnessConfig()), Maximize)
        assert isinstance(build_fitness(FitnessConfig(method="minimize")), Minimize)

    def test_minimize_energy(self) -> None:
        """Temperature and unit reach the energy policy."""
        policy = build_fitness(
            FitnessConfig(method="minimize_energy", temperature=500.0, energy_unit="kcal")
        )
        assert isinstance(policy, MinimizeEnergy)
        assert policy.temperature == 500.0
        assert policy.energy_unit is EnergyUnit.KCAL


class TestBuildGears:
    """Test breeder, survivor and terminator factories."""

    def test_breeder(self) -> None:
        """The breeder combines selection, variation and mutation settings."""
        config = EvokitConfig(
            selection=SelectionConfig(method="tournament", n=2),
            breeder=BreederConfig(
                mutation_probability=0.3, per_genome_mutation=False, mutation_size=2
            ),
        )
        breeder = build_breeder(config)
        assert isinstance(breeder.selection, TournamentSelection)
        assert isinstance(breeder.variation, OnePointCrossover)
        assert breeder.mutation_probability == 0.3
        assert breeder.per_genome_mutation is False
        assert breeder.mutation.mutation_size == 2

    def test_survivor(self) -> None:
        """remove_duplicates is passed through."""
        assert build_survivor(SurvivorConfig(remove_duplicates=True)).remove_duplicates

    def test_terminators(self) -> None:
        """The running mean is always present, the cap only when set."""
        terminators = build_terminators(TerminationConfig(running_mean_nlast=5, epsilon=0.1))
        assert len(terminators) == 2
        running_mean, cap = terminators
        assert isinstance(running_mean, RunningMean)
        assert running_mean.nlast == 5
        assert isinstance(cap, MaxGeneration)
        assert cap.max_generations == 100

        uncapped = build_terminators(TerminationConfig(max_generations=None))
        assert [type(t) for t in uncapped] == [RunningMean]

    def test_logging_config(self) -> None:
        """The logging section maps onto the runtime logging config."""
        config = EvokitConfig(logging=LoggingConfig(level="debug", mode="prod"))
        runtime = build_logging_config(config)
        assert runtime.mode is LogMode.PROD
        assert runtime.log_level == "DEBUG"
        assert runtime.enable_file_logging is False
