"""Evolution module - data model, fitness policies and the generational loop.

Main components:
- Individual / Population: evaluated genomes and their fitness
- Fitness: Maximize, Minimize, MinimizeEnergy (annealed)
- Termination: RunningMean, MaxGeneration
- Engine: the generational loop
"""

from evokit.evolution.annealing import Annealer
from evokit.evolution.engine import Engine, EngineState, EvolutionAlgorithm
from evokit.evolution.fitness import (
    BOLTZMANN,
    EnergyUnit,
    FitnessEvaluator,
    Maximize,
    Minimize,
    MinimizeEnergy,
    parse_energy_unit,
)
from evokit.evolution.individual import Individual, ObjectiveEvaluator, create_individuals
from evokit.evolution.population import (
    Member,
    Population,
    evaluate_individuals,
    sort_members_by_fitness,
)
from evokit.evolution.termination import Generation, MaxGeneration, RunningMean, Terminator

__all__ = [
    # Individuals
    "Individual",
    "ObjectiveEvaluator",
    "create_individuals",
    # Population
    "Member",
    "Population",
    "evaluate_individuals",
    "sort_members_by_fitness",
    # Fitness
    "BOLTZMANN",
    "EnergyUnit",
    "FitnessEvaluator",
    "Maximize",
    "Minimize",
    "MinimizeEnergy",
    "parse_energy_unit",
    "Annealer",
    # Termination
    "Generation",
    "MaxGeneration",
    "RunningMean",
    "Terminator",
    # Engine
    "Engine",
    "EngineState",
    "EvolutionAlgorithm",
]
