# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from habitual.errors import HabitualError
from habitual.service.unit import convert_unit, format_value
from habitual.terminal.common import exit_with_error
from habitual.terminal.parse import parse_tracked_value


def convert(
    value: Annotated[float, typer.Argument(parser=parse_tracked_value)],
    from_unit: Annotated[str, typer.Argument(help="ml, l, gallon, min, hours")],
    to_unit: Annotated[str, typer.Argument(help="ml, l, gallon, min, hours")],
) -> None:
    """Convert a value between units of the same kind."""
    try:
        result = convert_unit(value, from_unit, to_unit)
    except HabitualError as e:
        exit_with_error(e)

    typer.echo(f"{format_value(value)} {from_unit} = {format_value(result)} {to_unit}")
