# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy

import pendulum

from habitual.errors import DataIntegrityError
from habitual.model.entity_id import EntityId
from habitual.model.task import Task
from habitual.model.tracking import TrackingRecord
from habitual.model.tracking_view import TrackedView, TrackingView, UntrackedView
from habitual.repository.store import TrackingStore
from habitual.service.engine import apply_target
from habitual.service.unit import convert_unit
from habitual.time import date_to_display_str, datetime_to_display_str, date_to_str

logger = logging.getLogger(__name__)


async def resolve_tracking(
    store: TrackingStore, task_id: EntityId, date: pendulum.Date
) -> TrackingView:
    """
    Build the reconciled tracking view for a task on a date.

    Store failures propagate untouched; no partial view is ever returned.
    A date without a tracking record resolves to an UntrackedView, which is
    the normal "nothing tracked yet" state and not an error.
    """
    task = await store.get_task(task_id)
    trackings = await store.find_trackings(task_id, date)

    if len(trackings) > 1:
        logger.error(
            "%d tracking records for task %s on %s",
            len(trackings),
            task_id,
            date_to_str(date),
        )
        raise DataIntegrityError("Multiple rows returned for task tracking query")

    if len(trackings) == 0:
        return untracked_view(task, date)
    return tracked_view(task, trackings[0])


def untracked_view(task: Task, date: pendulum.Date) -> UntrackedView:
    value, completed = apply_target(0, task["value"])
    return {
        "kind": "not_tracked",
        "id": "",
        "task_id": _task_id(task),
        "date": date,
        "value": value,
        "unit": task["unit"],
        "target": task["value"],
        "completed": completed,
        "task_not_found": True,
        "task_details": deepcopy(task),
        "created_time": datetime_to_display_str(task["created"]),
        "date_formatted": None,
        "updated_time": None,
    }


def tracked_view(task: Task, tracking: TrackingRecord) -> TrackedView:
    value = tracking["value"]
    if tracking["unit"] != task["unit"]:
        value = convert_unit(value, tracking["unit"], task["unit"])
    value, completed = apply_target(value, task["value"])

    if tracking["id"] is None:
        raise ValueError("Tracking record must have an ID")

    return {
        "kind": "tracked",
        "id": tracking["id"],
        "task_id": _task_id(task),
        "date": tracking["date"],
        "value": value,
        "unit": task["unit"],
        "target": task["value"],
        "completed": completed,
        "task_not_found": False,
        "task_details": deepcopy(task),
        "created_time": datetime_to_display_str(task["created"]),
        "date_formatted": date_to_display_str(tracking["date"]),
        "updated_time": datetime_to_display_str(tracking["updated"]),
    }


def _task_id(task: Task) -> EntityId:
    if task["id"] is None:
        raise ValueError("Task must have an ID")
    return task["id"]
