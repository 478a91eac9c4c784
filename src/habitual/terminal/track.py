# SPDX-License-Identifier: MIT

import asyncio
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from habitual.errors import HabitualError
from habitual.model.entity_id import EntityId
from habitual.model.tracking_view import TrackingView
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.store import LocalTrackingStore, TrackingStore
from habitual.repository.task import TASK_REPO
from habitual.repository.task_meta import TASK_META_REPO
from habitual.service.envelope import EnvelopeTrackingStore, serve
from habitual.service.period import get_period_dates, is_task_active
from habitual.service.resolver import resolve_tracking
from habitual.service.scheduler import DebouncedWriteScheduler
from habitual.service.session import TrackingSession
from habitual.terminal.common import exit_with_error, resolve_task_id
from habitual.terminal.custom_typer import AliasedTyperGroup
from habitual.terminal.parse import parse_date, parse_tracked_value
from habitual.time import today_local
from habitual.view import tracking as tracking_report
from habitual.view.util import format_progress

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateOption = Annotated[
    Optional[pendulum.Date],
    typer.Option("--date", "-dt", parser=parse_date, help="default: today"),
]


def open_store() -> TrackingStore:
    return EnvelopeTrackingStore(serve(LocalTrackingStore()))


def open_scheduler() -> DebouncedWriteScheduler:
    config = CONFIGURATION_REPO.get_config()
    return DebouncedWriteScheduler(delay=config["debounce_seconds"])


def habit_name(view: TrackingView) -> str:
    task_meta_id = view["task_details"]["task_meta_id"]
    task_meta = TASK_META_REPO.find_task_meta(task_meta_id)
    return task_meta["name"] if task_meta is not None else task_meta_id


async def _adjust(
    task_id: EntityId, date: pendulum.Date, step: str, times: int
) -> TrackingView:
    store = open_store()
    scheduler = open_scheduler()
    session = await TrackingSession.open(store, scheduler, task_id, date)
    for _ in range(times):
        if step == "up":
            session.increment()
        else:
            session.decrement()
    await scheduler.flush()
    return await session.refresh()


async def _set(task_id: EntityId, date: pendulum.Date, value: float) -> TrackingView:
    store = open_store()
    scheduler = open_scheduler()
    session = await TrackingSession.open(store, scheduler, task_id, date)
    session.set_value(value)
    await scheduler.flush()
    return await session.refresh()


@app.command("show, s", no_args_is_help=True)
def show(id: int, date: DateOption = None) -> None:
    """Show progress of a task on a date."""
    track_date = date if date is not None else today_local()
    try:
        view = asyncio.run(
            resolve_tracking(open_store(), resolve_task_id(id), track_date)
        )
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.single_tracking_view(habit_name(view), view)


@app.command("up, u", no_args_is_help=True)
def up(
    id: int,
    date: DateOption = None,
    times: Annotated[int, typer.Option("--times", "-n", min=1)] = 1,
) -> None:
    """Step a task's tracked value up."""
    track_date = date if date is not None else today_local()
    try:
        view = asyncio.run(_adjust(resolve_task_id(id), track_date, "up", times))
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.single_tracking_view(habit_name(view), view)


@app.command("down, dn", no_args_is_help=True)
def down(
    id: int,
    date: DateOption = None,
    times: Annotated[int, typer.Option("--times", "-n", min=1)] = 1,
) -> None:
    """Step a task's tracked value down."""
    track_date = date if date is not None else today_local()
    try:
        view = asyncio.run(_adjust(resolve_task_id(id), track_date, "down", times))
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.single_tracking_view(habit_name(view), view)


@app.command("set", no_args_is_help=True)
def set_value(
    id: int,
    value: Annotated[float, typer.Argument(parser=parse_tracked_value)],
    date: DateOption = None,
) -> None:
    """Set a task's tracked value, in the task's unit."""
    track_date = date if date is not None else today_local()
    try:
        view = asyncio.run(_set(resolve_task_id(id), track_date, value))
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.single_tracking_view(habit_name(view), view)


async def _live(task_id: EntityId, date: pendulum.Date) -> None:
    console = Console()
    store = open_store()
    scheduler = open_scheduler()
    session = await TrackingSession.open(store, scheduler, task_id, date)
    name = habit_name(session.view)

    console.print(
        "[dim]+ step up, - step down, a number sets the value, q quits[/dim]"
    )
    while True:
        console.print(
            f"{name}: {format_progress(session.value, session.target, session.unit)}"
            + (" [green]done[/green]" if session.completed else "")
        )
        command = (await asyncio.to_thread(input, "> ")).strip()
        if command in ("q", "quit", ""):
            break
        try:
            if command == "+":
                session.increment()
            elif command == "-":
                session.decrement()
            else:
                session.set_value(parse_tracked_value(command))
        except (HabitualError, typer.BadParameter) as e:
            console.print(f"[red]{e}[/red]")

    await scheduler.flush()


@app.command("live, l", no_args_is_help=True)
def live(id: int, date: DateOption = None) -> None:
    """
    Adjust a task interactively.

    Changes are saved once you pause for the configured debounce window, and
    any pending change is saved on quit.
    """
    track_date = date if date is not None else today_local()
    try:
        asyncio.run(_live(resolve_task_id(id), track_date))
    except HabitualError as e:
        exit_with_error(e)


async def _resolve_many(
    pairs: list[tuple[EntityId, pendulum.Date]],
) -> list[TrackingView]:
    store = open_store()
    return [await resolve_tracking(store, task_id, date) for task_id, date in pairs]


@app.command("today, t")
def today(date: DateOption = None) -> None:
    """Show progress of every task active on a date."""
    track_date = date if date is not None else today_local()
    tasks = [
        task
        for task in TASK_REPO.get_all_tasks()
        if task["id"] is not None and is_task_active(task, track_date)
    ]
    tasks = sorted(tasks, key=lambda task: task["created"])

    try:
        views = asyncio.run(
            _resolve_many([(task["id"], track_date) for task in tasks])  # type: ignore[misc]
        )
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.day_tracking_view(
        date_to_report_name(track_date), [(habit_name(view), view) for view in views]
    )


@app.command("week, w", no_args_is_help=True)
def week(id: int, date: DateOption = None) -> None:
    """Show a task's progress for each day of the week containing a date."""
    track_date = date if date is not None else today_local()
    try:
        task_id = resolve_task_id(id)
        views = asyncio.run(
            _resolve_many(
                [(task_id, day) for day in get_period_dates("WEEKLY", track_date)]
            )
        )
    except HabitualError as e:
        exit_with_error(e)

    tracking_report.day_tracking_view(
        "week", [(habit_name(view), view) for view in views]
    )


def date_to_report_name(date: pendulum.Date) -> str:
    if date == today_local():
        return "today"
    return date.to_date_string()
