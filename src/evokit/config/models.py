"""Pydantic models for Evokit configuration.

This module defines the configuration schema using Pydantic v2.
All configuration validation happens through these models.

Classes:
    RandomConfig: Random source seeding
    SelectionConfig: Parent selection operator
    VariationConfig: Crossover or mutation operator
    BreederConfig: Mutation applied after variation
    FitnessConfig: Fitness policy
    SurvivorConfig: Survival pruning
    TerminationConfig: Stopping criteria
    EvaluationConfig: Objective evaluation parallelism
    EngineSettings: Generational loop settings
    LoggingConfig: Logging configuration
    EvokitConfig: Top-level configuration combining all sections
"""

from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

SelectionMethod = Literal[
    "elitist",
    "roulette_wheel",
    "tournament",
    "stochastic_universal",
    "random",
]
VariationMethod = Literal["one_point", "triadic", "flip_bit"]
FitnessMethod = Literal["maximize", "minimize", "minimize_energy"]

# parents consumed per call by each crossover; flip_bit takes any number
VARIATION_ARITY: dict[str, int] = {"one_point": 2, "triadic": 3}


class RandomConfig(BaseModel, frozen=True):
    """Random source configuration.

    Attributes:
        seed: Fixed seed for reproducible runs. EVOKIT_RANDOM_SEED takes
            over when unset; a fresh seed is drawn when both are unset.
    """

    seed: int | None = None


class SelectionConfig(BaseModel, frozen=True):
    """Parent selection configuration.

    Attributes:
        method: Selection operator to use
        n: Number of members selected per variation call
        allow_repetition: Whether roulette/random selection may pick the
            same member more than once
    """

    method: SelectionMethod = "elitist"
    n: int = Field(default=2, ge=1)
    allow_repetition: bool = True


class VariationConfig(BaseModel, frozen=True):
    """Variation operator configuration.

    Attributes:
        method: Variation operator to use
        mutation_size: Bits flipped per genome when method is flip_bit
    """

    method: VariationMethod = "one_point"
    mutation_size: int = Field(default=1, ge=1)


class BreederConfig(BaseModel, frozen=True):
    """Breeder configuration.

    Attributes:
        mutation_probability: Chance of mutating a bred genome
        per_genome_mutation: Draw per genome; False draws once per batch
        mutation_size: Bits flipped per mutated genome
    """

    mutation_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    per_genome_mutation: bool = True
    mutation_size: int = Field(default=1, ge=1)


class FitnessConfig(BaseModel, frozen=True):
    """Fitness policy configuration.

    Attributes:
        method: Fitness policy to use
        temperature: Final annealing temperature for minimize_energy (K)
        energy_unit: Unit of objective values for minimize_energy
    """

    method: FitnessMethod = "maximize"
    temperature: float = Field(default=300.0, gt=0.0)
    energy_unit: Literal["eV", "au", "kcal", "kJ"] = "eV"


class SurvivorConfig(BaseModel, frozen=True):
    """Survivor configuration.

    Attributes:
        remove_duplicates: Drop duplicate genomes before ranking
    """

    remove_duplicates: bool = False


class TerminationConfig(BaseModel, frozen=True):
    """Termination configuration.

    Attributes:
        running_mean_nlast: Window size of the running-mean criterion
        epsilon: Convergence threshold of the running-mean criterion
        max_generations: Hard cap on generations; None disables it
    """

    running_mean_nlast: int = Field(default=30, ge=1)
    epsilon: float = Field(default=1e-6, gt=0.0)
    max_generations: int | None = Field(default=100, ge=0)


class EvaluationConfig(BaseModel, frozen=True):
    """Objective evaluation configuration.

    Attributes:
        max_workers: Threads used to evaluate new genomes; None or 1
            evaluates inline
    """

    max_workers: int | None = Field(default=None, ge=1)


class EngineSettings(BaseModel, frozen=True):
    """Generational loop configuration.

    Attributes:
        n_offspring: Genomes bred per generation; None uses the population
            size
    """

    n_offspring: int | None = Field(default=None, ge=1)


class LoggingConfig(BaseModel, frozen=True):
    """Logging configuration.

    Attributes:
        level: Log level (debug, info, warning, error)
        mode: Output mode (dev for console, prod for JSON)
        enable_file_logging: Whether to also write ~/.evokit/logs/evokit.log
    """

    level: Literal["debug", "info", "warning", "error"] = "info"
    mode: Literal["dev", "prod"] = "dev"
    enable_file_logging: bool = False


class EvokitConfig(BaseModel, frozen=True):
    """Top-level Evokit configuration.

    This is the main configuration model that combines all section configs.
    It validates against config.yaml in ~/.evokit/.
    """

    random: RandomConfig = Field(default_factory=RandomConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    variation: VariationConfig = Field(default_factory=VariationConfig)
    breeder: BreederConfig = Field(default_factory=BreederConfig)
    fitness: FitnessConfig = Field(default_factory=FitnessConfig)
    survivor: SurvivorConfig = Field(default_factory=SurvivorConfig)
    termination: TerminationConfig = Field(default_factory=TerminationConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def validate_parent_arity(self) -> Self:
        """Validate that selection feeds the crossover the parents it needs."""
        arity = VARIATION_ARITY.get(self.variation.method)
        if arity is not None and self.selection.n != arity:
            msg = (
                f"variation method {self.variation.method!r} needs {arity} parents "
                f"but selection.n is {self.selection.n}"
            )
            raise ValueError(msg)
        return self


def get_default_config() -> EvokitConfig:
    """Get the default Evokit configuration.

    Returns:
        EvokitConfig with all default values populated.
    """
    return EvokitConfig()


def get_config_dir() -> Path:
    """Get the Evokit configuration directory path.

    Returns:
        Path to ~/.evokit/
    """
    return Path.home() / ".evokit"
