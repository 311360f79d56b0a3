"""Gears: the composite stages of a generation (breed, survive, value)."""

from evokit.gears.breeder import Breeder, GeneticBreeder
from evokit.gears.survivor import SurvivalOperator, Survivor
from evokit.gears.valuer import Valuer

__all__ = [
    "Breeder",
    "GeneticBreeder",
    "SurvivalOperator",
    "Survivor",
    "Valuer",
]
