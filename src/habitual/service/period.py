# SPDX-License-Identifier: MIT

import pendulum

from habitual.model.task import Task


def get_period_boundaries(
    task_frequency: str,
    reference: pendulum.Date,
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Get the first and last day (inclusive) of the period containing `reference`.

    DAILY periods are the day itself, WEEKLY periods run Sunday to Saturday.
    """
    if task_frequency == "DAILY":
        return reference, reference
    if task_frequency == "WEEKLY":
        # pendulum weekdays: Monday = 0 ... Sunday = 6
        days_since_sunday = (reference.weekday() + 1) % 7
        start = reference.subtract(days=days_since_sunday)
        return start, start.add(days=6)
    raise ValueError(f"Unsupported task frequency: {task_frequency}")


def get_period_dates(
    task_frequency: str,
    reference: pendulum.Date,
) -> list[pendulum.Date]:
    start, end = get_period_boundaries(task_frequency, reference)
    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current = current.add(days=1)
    return dates


def is_task_active(task: Task, date: pendulum.Date) -> bool:
    """True when `task` is live and `date` falls inside its date range."""
    if task["deleted"] is not None:
        return False
    if date < task["from_date"]:
        return False
    if task["to_date"] is not None and date > task["to_date"]:
        return False
    return True
