"""Genetic operators: parent selection and variation."""

from evokit.operators.base import Mutable, SelectionOperator, VariationOperator
from evokit.operators.selection import (
    ElitistSelection,
    RandomSelection,
    RouletteWheelSelection,
    StochasticUniversalSampling,
    TournamentSelection,
)
from evokit.operators.variation import FlipBitMutation, OnePointCrossover, TriadicCrossover

__all__ = [
    # Contracts
    "Mutable",
    "SelectionOperator",
    "VariationOperator",
    # Selection
    "ElitistSelection",
    "RandomSelection",
    "RouletteWheelSelection",
    "StochasticUniversalSampling",
    "TournamentSelection",
    # Variation
    "FlipBitMutation",
    "OnePointCrossover",
    "TriadicCrossover",
]
