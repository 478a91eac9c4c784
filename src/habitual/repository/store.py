# SPDX-License-Identifier: MIT

from typing import Optional, Protocol

import pendulum

from habitual.errors import TrackingNotFoundError
from habitual.model.entity_id import EntityId
from habitual.model.task import Task
from habitual.model.tracking import TrackingRecord
from habitual.repository.task import TASK_REPO, TaskRepository
from habitual.repository.tracking import TRACKING_REPO, TrackingRepository
from habitual.template.tracking import get_tracking_template


class TrackingStore(Protocol):
    """
    The backing store consumed by the resolver and the tracking session.

    Every call may suspend. Failures are raised as HabitualError subclasses.
    """

    async def get_task(self, task_id: EntityId) -> Task: ...

    async def find_trackings(
        self, task_id: EntityId, date: pendulum.Date
    ) -> list[TrackingRecord]: ...

    async def create_tracking(
        self, task_id: EntityId, date: pendulum.Date, value: float, unit: str
    ) -> TrackingRecord: ...

    async def update_tracking(
        self,
        id: EntityId,
        task_id: EntityId,
        date: pendulum.Date,
        value: float,
        unit: str,
    ) -> TrackingRecord: ...


class LocalTrackingStore:
    """TrackingStore backed by the YAML repositories, flushing on every write."""

    def __init__(
        self,
        task_repo: Optional[TaskRepository] = None,
        tracking_repo: Optional[TrackingRepository] = None,
    ) -> None:
        self._task_repo = task_repo if task_repo is not None else TASK_REPO
        self._tracking_repo = (
            tracking_repo if tracking_repo is not None else TRACKING_REPO
        )

    async def get_task(self, task_id: EntityId) -> Task:
        return self._task_repo.get_task(task_id)

    async def find_trackings(
        self, task_id: EntityId, date: pendulum.Date
    ) -> list[TrackingRecord]:
        return self._tracking_repo.find_trackings(task_id, date)

    async def create_tracking(
        self, task_id: EntityId, date: pendulum.Date, value: float, unit: str
    ) -> TrackingRecord:
        # Verify the task exists before claiming the date
        self._task_repo.get_task(task_id)

        tracking = get_tracking_template()
        tracking["task_id"] = task_id
        tracking["date"] = date
        tracking["value"] = value
        tracking["unit"] = unit

        id = self._tracking_repo.save_new_tracking(tracking)
        self._tracking_repo.flush()
        return self._tracking_repo.get_tracking(id)

    async def update_tracking(
        self,
        id: EntityId,
        task_id: EntityId,
        date: pendulum.Date,
        value: float,
        unit: str,
    ) -> TrackingRecord:
        self._task_repo.get_task(task_id)

        existing = self._tracking_repo.get_tracking(id)
        if existing["task_id"] != task_id:
            raise TrackingNotFoundError("Task tracking record not found")

        self._tracking_repo.modify_tracking(id, date, value, unit)
        self._tracking_repo.flush()
        return self._tracking_repo.get_tracking(id)
