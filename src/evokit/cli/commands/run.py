"""Run command group for Evokit.

Run evolutionary searches from the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from evokit.cli.formatters.panels import print_error, print_success
from evokit.cli.formatters.tables import create_generation_table, print_table
from evokit.config import (
    EvokitConfig,
    build_breeder,
    build_fitness,
    build_logging_config,
    build_survivor,
    build_terminators,
    config_exists,
    get_default_config,
    load_config,
)
from evokit.core.errors import EvokitError
from evokit.core.random import create_rng
from evokit.encoding.binary import Binary, OneMax
from evokit.evolution.engine import Engine, EvolutionAlgorithm
from evokit.evolution.termination import Generation
from evokit.observability.logging import configure_logging, set_console_logging

app = typer.Typer(
    name="run",
    help="Run evolutionary searches.",
    no_args_is_help=True,
)


@app.callback()
def run() -> None:
    """Run evolutionary searches."""


def _resolve_config(config_file: Path | None) -> EvokitConfig:
    if config_file is not None:
        return load_config(config_file)
    if config_exists():
        return load_config()
    return get_default_config()


def run_onemax(
    config: EvokitConfig,
    *,
    bits: int,
    population: int,
    seed: int | None = None,
    max_generations: int | None = None,
) -> list[Generation[Binary]]:
    """Evolve random bit strings toward all ones.

    Args:
        config: Operator and termination settings.
        bits: Genome length.
        population: Number of seed genomes, and the population size.
        seed: Random seed; falls back to config.random.seed.
        max_generations: Overrides termination.max_generations when set.

    Returns:
        Every generation produced, generation 0 first.
    """
    rng = create_rng(seed if seed is not None else config.random.seed)
    seeds = [Binary.draw(bits, rng) for _ in range(population)]

    termination = config.termination
    if max_generations is not None:
        termination = termination.model_copy(update={"max_generations": max_generations})

    engine: Engine[Binary] = (
        Engine.create()
        .with_creator(OneMax())
        .with_fitness(build_fitness(config.fitness))
        .with_algorithm(EvolutionAlgorithm(build_breeder(config), build_survivor(config.survivor)))
        .with_rng(rng)
        .with_max_workers(config.evaluation.max_workers)
    )
    if config.engine.n_offspring is not None:
        engine.with_offspring(config.engine.n_offspring)
    for terminator in build_terminators(termination):
        engine.with_terminator(terminator)

    return list(engine.evolve(seeds))


@app.command()
def onemax(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml.", exists=True, dir_okay=False),
    ] = None,
    bits: Annotated[int, typer.Option("--bits", "-b", min=1, help="Genome length.")] = 8,
    population: Annotated[
        int, typer.Option("--population", "-p", min=2, help="Population size.")
    ] = 10,
    generations: Annotated[
        int | None,
        typer.Option("--generations", "-g", min=0, help="Maximum number of generations."),
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Random seed.")] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print structured logs to stderr.")
    ] = False,
) -> None:
    """Maximize the number of set bits in a bit string.

    Operators and termination come from the configuration file; the options
    override the demo-specific settings.
    """
    try:
        config = _resolve_config(config_file)
        configure_logging(build_logging_config(config))
        set_console_logging(verbose)
        history = run_onemax(
            config,
            bits=bits,
            population=population,
            seed=seed,
            max_generations=generations,
        )
    except EvokitError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    finally:
        set_console_logging(True)

    print_table(create_generation_table(history, title=f"OneMax ({bits} bits)"))

    best = history[-1].best_individual()
    print_success(
        f"Best genome {best.genome} scored {best.objective_value:g}/{bits} "
        f"after {history[-1].index} generations"
    )


__all__ = ["app", "run_onemax"]
