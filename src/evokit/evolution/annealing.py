"""Simulated-annealing temperature schedule."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from evokit.core.errors import ConfigError


@dataclass
class Annealer:
    """Geometric cooling schedule between two temperatures.

    The temperature starts at temperature_high and is multiplied by
    cooling_rate on every step. The schedule ends once the temperature
    drops to or below temperature_low, and stays ended until reset().

    Attributes:
        temperature_high: Starting temperature.
        temperature_low: Floor at which the schedule stops.
        cooling_rate: Multiplier applied per step, strictly between 0 and 1.
    """

    temperature_high: float = 5000.0
    temperature_low: float = 2000.0
    cooling_rate: float = 0.92
    _temperature: float | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.temperature_high <= self.temperature_low:
            raise ConfigError(
                "temperature_high must be greater than temperature_low",
                config_key="temperature_high",
                details={
                    "temperature_high": self.temperature_high,
                    "temperature_low": self.temperature_low,
                },
            )
        if not 0.0 < self.cooling_rate < 1.0:
            raise ConfigError(
                f"cooling_rate must lie in (0, 1), got {self.cooling_rate}",
                config_key="cooling_rate",
            )

    @property
    def temperature(self) -> float | None:
        """Current temperature, or None before the first step."""
        return self._temperature

    def start(self) -> Iterator[float]:
        """Yield successive temperatures until the floor is reached.

        Progress is kept on the annealer, so a new iterator resumes where the
        previous one stopped.
        """
        while True:
            if self._temperature is None:
                self._temperature = self.temperature_high
            self._temperature *= self.cooling_rate
            if self._temperature <= self.temperature_low:
                return
            yield self._temperature

    def reset(self) -> None:
        """Restart the schedule from temperature_high."""
        self._temperature = None
