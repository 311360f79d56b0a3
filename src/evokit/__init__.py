"""Evokit - generational evolutionary optimization engine.

A domain-agnostic genetic algorithm toolkit: candidate genomes are
evaluated, selected, recombined and pruned generation after generation
until a termination criterion fires.

Example:
    # Using CLI
    evokit run onemax --bits 8 --population 10

    # Using Python
    from evokit.encoding import Binary, OneMax
    from evokit.evolution import Engine, Maximize
"""

__version__ = "0.4.0"

__all__ = ["__version__", "main"]


def main() -> None:
    """Main entry point for the Evokit CLI.

    This function invokes the Typer app from evokit.cli.main.
    """
    from evokit.cli.main import app

    app()
