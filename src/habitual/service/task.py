# SPDX-License-Identifier: MIT

import math
from typing import Optional, get_args

import pendulum

from habitual.errors import TaskValidationError
from habitual.model.task import Task, TaskFrequency
from habitual.model.task_meta import TaskMeta
from habitual.service.unit import convert_unit, is_convertible
from habitual.template.task import get_task_template

TASK_FREQUENCIES = get_args(TaskFrequency)

# Target used for habits that are simply done or not done
CHECKIN_TARGET = 1


def validate_task_frequency(task_frequency: str) -> None:
    if task_frequency not in TASK_FREQUENCIES:
        raise TaskValidationError(
            f"Invalid frequency: {task_frequency}. "
            f"Valid options: {', '.join(TASK_FREQUENCIES)}"
        )


def validate_task_unit(task_meta: TaskMeta, unit: str) -> None:
    if not task_meta["measurable"]:
        if unit != "":
            raise TaskValidationError(
                f"'{task_meta['name']}' is not measurable and takes no unit."
            )
        return
    if unit not in task_meta["units"]:
        raise TaskValidationError(
            f"Invalid unit for '{task_meta['name']}': {unit}. "
            f"Valid options: {', '.join(task_meta['units'])}"
        )


def validate_task_target(value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise TaskValidationError(f"Target must be a positive number. Got: {value}")


def validate_task_dates(
    from_date: pendulum.Date, to_date: Optional[pendulum.Date]
) -> None:
    if to_date is not None and to_date < from_date:
        raise TaskValidationError("The end date must not be before the start date.")


def default_unit(task_meta: TaskMeta) -> str:
    if not task_meta["measurable"]:
        return ""
    return task_meta["units"][0]


def default_target(task_meta: TaskMeta, unit: str) -> float:
    if not task_meta["measurable"]:
        return CHECKIN_TARGET
    return task_meta["default_target"][unit]


def create_task_from_meta(
    task_meta: TaskMeta,
    unit: Optional[str] = None,
    value: Optional[float] = None,
    from_date: Optional[pendulum.Date] = None,
    to_date: Optional[pendulum.Date] = None,
    task_frequency: str = "DAILY",
    description: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Task:
    """
    Create a task instance for a catalog entry.

    The unit defaults to the entry's first unit and the target to the entry's
    default target for that unit.
    """
    task_unit = unit if unit is not None else default_unit(task_meta)
    validate_task_unit(task_meta, task_unit)
    validate_task_frequency(task_frequency)

    task_value = value if value is not None else default_target(task_meta, task_unit)
    validate_task_target(task_value)

    task = get_task_template()
    task["task_meta_id"] = task_meta["id"]
    task["unit"] = task_unit
    task["value"] = task_value
    if from_date is not None:
        task["from_date"] = from_date
    task["to_date"] = to_date
    validate_task_dates(task["from_date"], task["to_date"])
    task["task_frequency"] = task_frequency  # type: ignore[typeddict-item]
    task["description"] = description
    task["tags"] = tags

    return task


def target_for_unit(task: Task, task_meta: TaskMeta, unit: str) -> float:
    """
    Target to use when a task moves to `unit` without an explicit target.

    The current target is converted when the units share a domain, otherwise
    the catalog default for the new unit applies.
    """
    if is_convertible(task["unit"], unit):
        return convert_unit(task["value"], task["unit"], unit)
    return default_target(task_meta, unit)
