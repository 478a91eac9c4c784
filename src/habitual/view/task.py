# SPDX-License-Identifier: MIT

from typing import Optional, cast

from rich import box
from rich.console import Console
from rich.table import Table

from habitual.model.entity_id import EntityId
from habitual.model.task import Task
from habitual.model.task_meta import TaskMeta
from habitual.repository.id_map import ID_MAP_REPO
from habitual.time import date_to_str_optional, datetime_to_display_str_optional
from habitual.view.header import header
from habitual.view.util import format_amount, format_tags


def _task_name(task: Task, task_metas: list[TaskMeta]) -> str:
    for task_meta in task_metas:
        if task_meta["id"] == task["task_meta_id"]:
            return task_meta["name"]
    return task["task_meta_id"]


def tasks_view(
    report_name: str,
    tasks: list[Task],
    task_metas: list[TaskMeta],
) -> None:
    """Display a list of task instances in a table."""
    header(report_name)

    tasks_table = Table(box=box.SIMPLE)
    for column in ["id", "habit", "target", "frequency", "from", "to", "tags"]:
        tasks_table.add_column(column)

    for task in tasks:
        tasks_table.add_row(
            str(ID_MAP_REPO.associate_id("tasks", cast(EntityId, task["id"]))),
            _task_name(task, task_metas),
            format_amount(task["value"], task["unit"]),
            task["task_frequency"],
            date_to_str_optional(task["from_date"]),
            date_to_str_optional(task["to_date"]) or "",
            format_tags(task["tags"]),
        )

    console = Console()
    console.print(tasks_table)


def single_task_view(task: Task, task_meta: Optional[TaskMeta]) -> None:
    """Display detailed view of a single task instance."""
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row(
        "id", str(ID_MAP_REPO.associate_id("tasks", cast(EntityId, task["id"])))
    )
    task_table.add_row(
        "habit", task_meta["name"] if task_meta is not None else task["task_meta_id"]
    )
    task_table.add_row("target", format_amount(task["value"], task["unit"]))
    task_table.add_row("frequency", task["task_frequency"])
    task_table.add_row("from", date_to_str_optional(task["from_date"]))
    task_table.add_row("to", date_to_str_optional(task["to_date"]) or "")
    task_table.add_row("description", task["description"] or "")
    task_table.add_row("tags", format_tags(task["tags"]))
    task_table.add_row("created", datetime_to_display_str_optional(task["created"]))
    task_table.add_row("updated", datetime_to_display_str_optional(task["updated"]))
    task_table.add_row("deleted", datetime_to_display_str_optional(task["deleted"]))

    console = Console()
    console.print(task_table)


def task_metas_view(task_metas: list[TaskMeta]) -> None:
    """Display the habit catalog."""
    header("catalog")

    catalog_table = Table(box=box.SIMPLE)
    for column in ["id", "name", "category", "units", "default target"]:
        catalog_table.add_column(column)

    for task_meta in task_metas:
        targets = ", ".join(
            format_amount(target, unit)
            for unit, target in task_meta["default_target"].items()
        )
        catalog_table.add_row(
            task_meta["id"],
            f"[{task_meta['color']}]{task_meta['name']}[/{task_meta['color']}]",
            task_meta["category"],
            ", ".join(task_meta["units"]) or "-",
            targets or "check-in",
        )

    console = Console()
    console.print(catalog_table)
