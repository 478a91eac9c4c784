# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from habitual.model.entity_id import EntityId
from habitual.model.tracking_view import TrackingView
from habitual.repository.id_map import ID_MAP_REPO
from habitual.time import date_to_display_str
from habitual.view.header import header
from habitual.view.util import completion_state, format_progress


def single_tracking_view(habit_name: str, view: TrackingView) -> None:
    """Display the reconciled tracking state of one task on one date."""
    header("tracking")

    tracking_table = Table(box=box.SIMPLE)
    tracking_table.add_column("property")
    tracking_table.add_column("value")

    tracking_table.add_row(
        "task", str(ID_MAP_REPO.associate_id("tasks", view["task_id"]))
    )
    tracking_table.add_row("habit", habit_name)
    tracking_table.add_row("date", date_to_display_str(view["date"]))
    tracking_table.add_row(
        "progress", format_progress(view["value"], view["target"], view["unit"])
    )
    tracking_table.add_row("completed", "yes" if view["completed"] else "no")
    if view["task_not_found"]:
        tracking_table.add_row("status", "[dim]not tracked yet[/dim]")
    tracking_table.add_row("updated", view["updated_time"] or "")
    tracking_table.add_row("task created", view["created_time"])

    console = Console()
    console.print(tracking_table)


def day_tracking_view(
    report_name: str,
    rows: list[tuple[str, TrackingView]],
) -> None:
    """Display one row per (habit name, view)."""
    header(report_name)

    day_table = Table(box=box.SIMPLE)
    for column in ["id", "habit", "date", "progress", "done"]:
        day_table.add_column(column)

    for habit_name, view in rows:
        day_table.add_row(
            str(
                ID_MAP_REPO.associate_id("tasks", cast(EntityId, view["task_id"]))
            ),
            habit_name,
            date_to_display_str(view["date"]),
            format_progress(view["value"], view["target"], view["unit"]),
            completion_state(view["completed"]),
        )

    console = Console()
    console.print(day_table)
