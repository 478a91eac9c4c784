# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from habitual.terminal import configuration, task, track
from habitual.terminal.convert import convert
from habitual.terminal.custom_typer import OrderedAliasedTyperGroup
from habitual.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="habitual - Habit tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t", help="Manage tasks.")
app.add_typer(track.app, name="track, tr", help="Track daily progress.")
app.add_typer(configuration.app, name="config, c", help="View or change settings.")
app.command(name="convert, cv")(convert)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    habitual - Habit tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
