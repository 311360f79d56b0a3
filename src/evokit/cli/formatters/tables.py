"""Rich tables for structured data display."""

from collections.abc import Hashable, Sequence
from typing import Any

from rich.table import Table

from evokit.cli.formatters import console
from evokit.evolution.termination import Generation


def create_table(
    title: str | None = None,
    *,
    show_header: bool = True,
    border_style: str = "blue",
    header_style: str = "bold cyan",
) -> Table:
    """Create a Rich Table with consistent Evokit styling.

    Args:
        title: Optional table title.
        show_header: Whether to show the header row.
        border_style: Style for table borders.
        header_style: Style for header row.

    Returns:
        Configured Rich Table instance.
    """
    return Table(
        title=title,
        show_header=show_header,
        border_style=border_style,
        header_style=header_style,
        row_styles=["", "dim"],
    )


def create_key_value_table(data: dict[str, Any], title: str | None = None) -> Table:
    """Create a two-column table for key-value data.

    Example:
        table = create_key_value_table({"method": "elitist", "n": 2}, "selection")
        print_table(table)
    """
    table = create_table(title, show_header=False)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(str(key), str(value))

    return table


def create_generation_table[G: Hashable](
    generations: Sequence[Generation[G]],
    title: str | None = "Generations",
) -> Table:
    """Create a table with one row per generation: best genome and score."""
    table = create_table(title)
    table.add_column("Gen", justify="right", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Best genome", style="highlight")
    table.add_column("Objective", justify="right")

    for generation in generations:
        best = generation.best_individual()
        table.add_row(
            str(generation.index),
            str(generation.population.size()),
            str(best.genome),
            f"{best.objective_value:g}",
        )

    return table


def print_table(table: Table) -> None:
    console.print(table)


__all__ = [
    "create_table",
    "create_key_value_table",
    "create_generation_table",
    "print_table",
]
