"""Build runtime operators from configuration sections.

Usage:
    config = load_config()
    breeder = build_breeder(config)
    engine = (
        Engine.create()
        .with_fitness(build_fitness(config.fitness))
        .with_algorithm(EvolutionAlgorithm(breeder, build_survivor(config.survivor)))
    )
"""

from __future__ import annotations

from typing import Any

from evokit.config.models import (
    EvokitConfig,
    FitnessConfig,
    SelectionConfig,
    SurvivorConfig,
    TerminationConfig,
    VariationConfig,
)
from evokit.core.errors import ConfigError
from evokit.evolution.fitness import Maximize, Minimize, MinimizeEnergy
from evokit.evolution.termination import MaxGeneration, RunningMean, Terminator
from evokit.gears.breeder import GeneticBreeder
from evokit.gears.survivor import Survivor
from evokit.observability.logging import LoggingConfig as RuntimeLoggingConfig
from evokit.observability.logging import LogMode
from evokit.operators.selection import (
    ElitistSelection,
    RandomSelection,
    RouletteWheelSelection,
    StochasticUniversalSampling,
    TournamentSelection,
)
from evokit.operators.variation import FlipBitMutation, OnePointCrossover, TriadicCrossover


def build_selection(config: SelectionConfig) -> Any:
    """Build the selection operator named by config.method."""
    match config.method:
        case "elitist":
            return ElitistSelection(config.n)
        case "roulette_wheel":
            return RouletteWheelSelection(config.n, allow_repetition=config.allow_repetition)
        case "tournament":
            return TournamentSelection(config.n)
        case "stochastic_universal":
            return StochasticUniversalSampling(config.n)
        case "random":
            return RandomSelection(config.n, allow_repetition=config.allow_repetition)
    raise ConfigError(f"unknown selection method: {config.method!r}", config_key="selection.method")


def build_variation(config: VariationConfig) -> Any:
    """Build the variation operator named by config.method."""
    match config.method:
        case "one_point":
            return OnePointCrossover()
        case "triadic":
            return TriadicCrossover()
        case "flip_bit":
            return FlipBitMutation(config.mutation_size)
    raise ConfigError(f"unknown variation method: {config.method!r}", config_key="variation.method")


def build_fitness(config: FitnessConfig) -> Maximize | Minimize | MinimizeEnergy:
    """Build the fitness policy named by config.method."""
    match config.method:
        case "maximize":
            return Maximize()
        case "minimize":
            return Minimize()
        case "minimize_energy":
            return MinimizeEnergy(config.temperature, config.energy_unit)
    raise ConfigError(f"unknown fitness method: {config.method!r}", config_key="fitness.method")


def build_breeder(config: EvokitConfig) -> GeneticBreeder[Any]:
    """Build a breeder from the selection, variation and breeder sections."""
    return GeneticBreeder(
        build_selection(config.selection),
        build_variation(config.variation),
        mutation_probability=config.breeder.mutation_probability,
        mutation=FlipBitMutation(config.breeder.mutation_size),
        per_genome_mutation=config.breeder.per_genome_mutation,
    )


def build_survivor(config: SurvivorConfig) -> Survivor:
    return Survivor(remove_duplicates=config.remove_duplicates)


def build_terminators(config: TerminationConfig) -> list[Terminator]:
    """Build the running-mean terminator plus the generation cap, if any."""
    terminators: list[Terminator] = [
        RunningMean(nlast=config.running_mean_nlast, epsilon=config.epsilon)
    ]
    if config.max_generations is not None:
        terminators.append(MaxGeneration(config.max_generations))
    return terminators


def build_logging_config(config: EvokitConfig) -> RuntimeLoggingConfig:
    """Translate the logging section into the runtime logging config."""
    return RuntimeLoggingConfig(
        mode=LogMode(config.logging.mode),
        log_level=config.logging.level.upper(),
        enable_file_logging=config.logging.enable_file_logging,
    )
