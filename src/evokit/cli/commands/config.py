"""Config command group for Evokit.

Create, inspect and validate the configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer

from evokit.cli.formatters import console
from evokit.cli.formatters.panels import print_error, print_info, print_success
from evokit.cli.formatters.tables import create_key_value_table, print_table
from evokit.config import (
    config_exists,
    create_default_config,
    dump_config,
    get_config_dir,
    get_default_config,
    load_config,
)
from evokit.core.errors import ConfigError

app = typer.Typer(
    name="config",
    help="Manage Evokit configuration.",
    no_args_is_help=True,
)


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing config file.")
    ] = False,
) -> None:
    """Initialize Evokit configuration.

    Creates ~/.evokit/config.yaml with default settings.
    """
    try:
        path = create_default_config(overwrite=force)
    except ConfigError as e:
        print_error(f"{e.message}\nUse --force to overwrite.")
        raise typer.Exit(1) from e
    print_success(f"Created {path}")


@app.command()
def show(
    section: Annotated[
        str | None,
        typer.Argument(help="Configuration section to display (e.g., 'selection')."),
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config.yaml.")
    ] = None,
) -> None:
    """Display current configuration.

    Shows all configuration if no section specified. Defaults are shown
    when no configuration file exists.
    """
    try:
        if config_file is None and not config_exists():
            print_info(f"No config file in {get_config_dir()}; showing defaults.")
            config = get_default_config()
        else:
            config = load_config(config_file)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    if section is None:
        console.print(dump_config(config), markup=False, highlight=False)
        return

    data = config.model_dump(mode="json")
    if section not in data:
        print_error(f"Unknown section: {section}. Choose from: {', '.join(data)}")
        raise typer.Exit(1)
    print_table(create_key_value_table(data[section], section))


@app.command()
def validate(
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config.yaml.")
    ] = None,
) -> None:
    """Validate current configuration.

    Checks the configuration file for syntax and schema errors.
    """
    try:
        load_config(config_file)
    except ConfigError as e:
        print_error(e.message, title="Invalid configuration")
        raise typer.Exit(1) from e
    print_success("Configuration is valid")


__all__ = ["app"]
