"""Top-level ``evokit`` command.

Two command groups hang off the root: ``run`` starts a search on a built-in
problem and ``config`` manages ~/.evokit/config.yaml.
"""

from typing import Annotated

import typer

from evokit import __version__
from evokit.cli.commands import config, run
from evokit.cli.formatters import console

TAGLINE = "Evokit - Generational Evolutionary Optimization"

COMMAND_GROUPS: dict[str, typer.Typer] = {
    "run": run.app,
    "config": config.app,
}

app = typer.Typer(
    name="evokit",
    help=TAGLINE,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

for group_name, group_app in COMMAND_GROUPS.items():
    app.add_typer(group_app, name=group_name)


def show_version(requested: bool) -> None:
    """Print the installed evokit version and stop option processing."""
    if not requested:
        return
    console.print(f"[bold cyan]evokit[/] [green]{__version__}[/]")
    raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=show_version,
            is_eager=True,
            help="Print the evokit version and exit.",
        ),
    ] = None,
) -> None:
    """Evokit - Generational Evolutionary Optimization.

    Evolve a seed population generation by generation: score genomes,
    pick parents, breed offspring and keep the fittest until the best
    score settles.

    Try [bold cyan]evokit run onemax --help[/] to start a search.
    """


__all__ = ["COMMAND_GROUPS", "TAGLINE", "app", "main", "show_version"]
