# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from habitual import configuration
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("debounce_seconds", str(config["debounce_seconds"]))
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "clear_ids_on_view",
        "✓ Enabled" if config.get("clear_ids_on_view", False) else "✗ Disabled",
    )

    console.print(table)


@app.command("set", no_args_is_help=True)
def set_config(
    debounce_seconds: Annotated[
        Optional[float],
        typer.Option("--debounce-seconds", help="delay before a change is saved"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header"),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option("--clear-ids-on-view/--keep-ids-on-view"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="directory holding habitual data"),
    ] = None,
    remove_data_path: Annotated[
        bool, typer.Option("--remove-data-path", help="use the default data path")
    ] = False,
) -> None:
    """Update configuration settings."""
    if debounce_seconds is not None and debounce_seconds < 0:
        typer.echo("debounce_seconds must not be negative", err=True)
        raise typer.Exit(1)
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        typer.echo(
            f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}",
            err=True,
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        debounce_seconds=debounce_seconds,
        log_level=log_level,
        show_header=show_header,
        clear_ids_on_view=clear_ids_on_view,
    )
    view()
