# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from habitual.errors import HabitualError, TaskValidationError
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.repository.task import TASK_REPO
from habitual.repository.task_meta import TASK_META_REPO
from habitual.service.period import is_task_active
from habitual.service.task import (
    create_task_from_meta,
    target_for_unit,
    validate_task_dates,
    validate_task_frequency,
    validate_task_target,
    validate_task_unit,
)
from habitual.terminal.common import exit_with_error, resolve_task_id
from habitual.terminal.custom_typer import AliasedTyperGroup
from habitual.terminal.parse import parse_date
from habitual.time import now_utc, today_local
from habitual.view import task as task_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("catalog, cat")
def catalog() -> None:
    """List the habits a task can be created from."""
    task_report.task_metas_view(TASK_META_REPO.get_all_task_metas())


@app.command("add, a", no_args_is_help=True)
def add(
    habit: Annotated[str, typer.Argument(help="catalog id or name, e.g. water")],
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="one of the habit's units"),
    ] = None,
    target: Annotated[
        Optional[float],
        typer.Option("--target", "-v", help="default: the habit's default target"),
    ] = None,
    frequency: Annotated[
        str,
        typer.Option("--frequency", "-f", help="DAILY, WEEKLY"),
    ] = "DAILY",
    from_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--from", "-fd", parser=parse_date, help="default: today"),
    ] = None,
    to_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--to", "-td", parser=parse_date, help="default: open-ended"),
    ] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", "-d"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-tg", help="accepts multiple tag options"),
    ] = None,
) -> None:
    """Create a task from a catalog habit."""
    task_meta = TASK_META_REPO.find_task_meta(habit)
    if task_meta is None:
        typer.echo(f"Unknown habit: {habit}", err=True)
        raise typer.Exit(1)

    try:
        task = create_task_from_meta(
            task_meta,
            unit=unit,
            value=target,
            from_date=from_date,
            to_date=to_date,
            task_frequency=frequency.upper(),
            description=description,
            tags=tags,
        )
    except TaskValidationError as e:
        exit_with_error(e)

    id = TASK_REPO.save_new_task(task)
    TASK_REPO.flush()

    task_report.single_task_view(TASK_REPO.get_task(id), task_meta)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: int,
    unit: Annotated[Optional[str], typer.Option("--unit", "-u")] = None,
    target: Annotated[Optional[float], typer.Option("--target", "-v")] = None,
    frequency: Annotated[
        Optional[str], typer.Option("--frequency", "-f", help="DAILY, WEEKLY")
    ] = None,
    from_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--from", "-fd", parser=parse_date),
    ] = None,
    to_date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--to", "-td", parser=parse_date),
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-tg")] = None,
    remove_to_date: Annotated[bool, typer.Option("--remove-to", "-rtd")] = False,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_tags: Annotated[bool, typer.Option("--remove-tags", "-rtgs")] = False,
) -> None:
    """
    Modify a task.

    Changing the unit leaves existing tracking records in their old unit; they
    are converted whenever they are read.
    """
    try:
        real_id = resolve_task_id(id)
        task = TASK_REPO.get_task(real_id)
        task_meta = TASK_META_REPO.find_task_meta(task["task_meta_id"])

        if unit is not None and task_meta is not None:
            validate_task_unit(task_meta, unit)
            if target is None:
                target = target_for_unit(task, task_meta, unit)
        if target is not None:
            validate_task_target(target)
        if frequency is not None:
            frequency = frequency.upper()
            validate_task_frequency(frequency)
        validate_task_dates(
            from_date if from_date is not None else task["from_date"],
            None if remove_to_date else (to_date or task["to_date"]),
        )

        TASK_REPO.modify_task(
            real_id,
            unit,
            target,
            from_date,
            to_date,
            frequency,
            description,
            tags,
            None,  # deleted
            remove_to_date,
            remove_description,
            remove_tags,
        )
    except HabitualError as e:
        exit_with_error(e)

    TASK_REPO.flush()
    task_report.single_task_view(TASK_REPO.get_task(real_id), task_meta)


@app.command("delete, d", no_args_is_help=True)
def delete(id: int) -> None:
    """Soft-delete a task; its tracking history is kept."""
    try:
        real_id = resolve_task_id(id)
        TASK_REPO.modify_task(
            real_id,
            None,
            None,
            None,
            None,
            None,
            None,
            None,
            now_utc(),  # deleted
            False,
            False,
            False,
        )
    except HabitualError as e:
        exit_with_error(e)

    TASK_REPO.flush()
    task = TASK_REPO.get_task(real_id)
    task_report.single_task_view(
        task, TASK_META_REPO.find_task_meta(task["task_meta_id"])
    )


@app.command("list, ls")
def list_tasks(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-dt", parser=parse_date, help="default: today"),
    ] = None,
    all: Annotated[
        bool, typer.Option("--all", "-a", help="include inactive and deleted")
    ] = False,
) -> None:
    """List tasks active on a date."""
    config = CONFIGURATION_REPO.get_config()
    if config.get("clear_ids_on_view", False):
        ID_MAP_REPO.clear_ids()

    list_date = date if date is not None else today_local()
    tasks = TASK_REPO.get_all_tasks()
    if not all:
        tasks = [task for task in tasks if is_task_active(task, list_date)]
    tasks = sorted(tasks, key=lambda task: task["created"])

    task_report.tasks_view("tasks", tasks, TASK_META_REPO.get_all_task_metas())
