"""Fitness evaluation policies.

A fitness evaluator turns the objective values of a pool of individuals into
comparison-friendly fitness values: one per individual, in the same order,
where a larger fitness always means a preferred individual. Fitness is
relative to the pool, unlike the objective value, so it is recomputed
whenever the population changes.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from enum import StrEnum
import math
from typing import Protocol, runtime_checkable

import structlog

from evokit.core.errors import ConfigError
from evokit.core.ordering import fmax, fmin
from evokit.evolution.annealing import Annealer
from evokit.evolution.individual import Individual

log = structlog.get_logger()

# Boltzmann constant in kJ/(mol*K)
BOLTZMANN = 0.0083145


@runtime_checkable
class FitnessEvaluator[G: Hashable](Protocol):
    """Protocol for mapping objective values to fitness values."""

    def evaluate(self, individuals: Sequence[Individual[G]]) -> list[float]:
        """Return one fitness value per individual, order preserved."""
        ...


class Maximize:
    """Prefer larger objective values.

    fitness = objective - min(objective), so the worst individual scores 0.
    """

    def evaluate(self, individuals: Sequence[Individual[Hashable]]) -> list[float]:
        values = [indv.objective_value for indv in individuals]
        if not values:
            log.warning("fitness.evaluate.empty_input", policy="maximize")
            return []
        worst = fmin(values)
        if worst is None:
            return [math.nan] * len(values)
        return [v - worst for v in values]

    def __repr__(self) -> str:
        return "Maximize()"


class Minimize:
    """Prefer smaller objective values.

    fitness = max(objective) - objective, so the worst individual scores 0.
    """

    def evaluate(self, individuals: Sequence[Individual[Hashable]]) -> list[float]:
        values = [indv.objective_value for indv in individuals]
        if not values:
            log.warning("fitness.evaluate.empty_input", policy="minimize")
            return []
        worst = fmax(values)
        if worst is None:
            return [math.nan] * len(values)
        return [worst - v for v in values]

    def __repr__(self) -> str:
        return "Minimize()"


class EnergyUnit(StrEnum):
    """Energy unit of objective values, for conversion to kJ/mol."""

    EV = "eV"
    AU = "au"
    KCAL = "kcal"
    KJ = "kJ"

    @property
    def conversion(self) -> float:
        """Factor converting one unit of this energy to kJ/mol."""
        return _ENERGY_CONVERSIONS[self]


_ENERGY_CONVERSIONS: dict[EnergyUnit, float] = {
    EnergyUnit.EV: 96.0,
    EnergyUnit.AU: 2625.5,
    EnergyUnit.KCAL: 4.184,
    EnergyUnit.KJ: 1.0,
}


def parse_energy_unit(unit: str | EnergyUnit) -> EnergyUnit:
    """Resolve an energy unit by name.

    Raises:
        ConfigError: If the unit is not one of eV, au, kcal or kJ.
    """
    try:
        return EnergyUnit(unit)
    except ValueError as e:
        raise ConfigError(
            f"unknown energy unit: {unit!r}",
            config_key="energy_unit",
            details={"supported": [u.value for u in EnergyUnit]},
        ) from e


class MinimizeEnergy:
    """Boltzmann-weighted fitness for energy minimization.

    fitness = exp(conversion * (min(energy) - energy) / (T * kB))

    The lowest energy always scores 1.0 and higher energies decay toward 0.
    T follows an annealing schedule from 10x the given temperature down to
    it, advancing one step per evaluate() call. Early generations see a
    flat landscape, later ones concentrate on the lowest energies. Once the
    schedule is exhausted T stays at the given temperature.
    """

    def __init__(
        self,
        temperature: float,
        energy_unit: str | EnergyUnit = EnergyUnit.EV,
    ) -> None:
        """Initialize the policy.

        Args:
            temperature: Final temperature in Kelvin. Must be positive.
            energy_unit: Unit of the objective values.

        Raises:
            ConfigError: If temperature is not positive or the unit is unknown.
        """
        if not temperature > 0.0:
            raise ConfigError(
                f"temperature must be positive, got {temperature}",
                config_key="temperature",
            )
        self.temperature = float(temperature)
        self.energy_unit = parse_energy_unit(energy_unit)
        self.annealer = Annealer(10.0 * self.temperature, self.temperature)
        self._schedule: Iterator[float] = self.annealer.start()

    def with_energy_unit(self, unit: str | EnergyUnit) -> MinimizeEnergy:
        """Set the energy unit of objective values and return self."""
        self.energy_unit = parse_energy_unit(unit)
        return self

    def next_temperature(self) -> float:
        """Advance the annealing schedule by one step."""
        return next(self._schedule, self.temperature)

    def evaluate(self, individuals: Sequence[Individual[Hashable]]) -> list[float]:
        energies = [indv.objective_value for indv in individuals]
        if not energies:
            log.warning("fitness.evaluate.empty_input", policy="minimize_energy")
            return []
        emin = fmin(energies)
        if emin is None:
            return [math.nan] * len(energies)

        temperature = self.next_temperature()
        log.debug(
            "fitness.annealing.temperature_updated",
            temperature=round(temperature, 3),
            energy_unit=self.energy_unit.value,
        )

        beta = self.energy_unit.conversion / (temperature * BOLTZMANN)
        return [math.exp(beta * (emin - e)) for e in energies]

    def __repr__(self) -> str:
        return (
            f"MinimizeEnergy(temperature={self.temperature}, "
            f"energy_unit={self.energy_unit.value!r})"
        )
