"""Individuals and the objective-value contract.

An individual is a genome paired with its objective value. Individuals are
only ever created by running genomes through an ObjectiveEvaluator, and are
never changed afterwards: recomputing a score produces a new individual.

The objective value is sometimes referred to as objective fitness since it
depends solely on the individual's genotype, not on the makeup of the
population it lives in (De Jong 2006).
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import structlog

log = structlog.get_logger()


@runtime_checkable
class ObjectiveEvaluator[G: Hashable](Protocol):
    """Protocol for computing the objective value of a genome.

    Evaluation is assumed to be the expensive step of a run, and may be
    called concurrently from worker threads. Implementations must be
    deterministic: the same genome always yields the same value. An
    evaluator that cannot score a genome should return a worst-case value
    rather than raise; exceptions are fatal to the run.
    """

    def evaluate(self, genome: G) -> float:
        """Return the objective value of genome."""
        ...


@dataclass(frozen=True, slots=True)
class Individual[G: Hashable]:
    """An evaluated genome.

    Attributes:
        genome: The encoded candidate solution.
        objective_value: Score assigned by the objective evaluator.
    """

    genome: G
    objective_value: float

    @classmethod
    def new(cls, genome: G, evaluator: ObjectiveEvaluator[G]) -> Individual[G]:
        """Create an individual by evaluating genome."""
        return cls(genome=genome, objective_value=evaluator.evaluate(genome))


def create_individuals[G: Hashable](
    evaluator: ObjectiveEvaluator[G],
    genomes: Iterable[G],
    *,
    max_workers: int | None = None,
) -> list[Individual[G]]:
    """Create individuals from genomes, evaluating each distinct genome once.

    Duplicates are dropped before evaluation, keeping first-seen order. With
    max_workers greater than one, evaluations fan out over a thread pool;
    results are reassembled in genome order.

    Args:
        evaluator: Objective evaluator applied to each distinct genome.
        genomes: Candidate genomes, possibly with repeats.
        max_workers: Number of worker threads. None or 1 evaluates inline.

    Returns:
        One individual per distinct genome.
    """
    candidates = list(genomes)
    distinct = list(dict.fromkeys(candidates))

    removed = len(candidates) - len(distinct)
    if removed > 0:
        log.info(
            "individual.create.duplicates_removed",
            removed=removed,
            total=len(candidates),
        )

    if max_workers is not None and max_workers > 1 and len(distinct) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            values = list(pool.map(evaluator.evaluate, distinct))
    else:
        values = [evaluator.evaluate(genome) for genome in distinct]

    return [
        Individual(genome=genome, objective_value=value)
        for genome, value in zip(distinct, values, strict=True)
    ]
