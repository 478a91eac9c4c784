"""In-memory collaborators for tests.

- InMemoryTrackingStore: a TrackingStore with write logging and failure hooks
- ManualTimers: a timer factory driven by `advance()` instead of the clock
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

import pendulum

from habitual.errors import (
    StoreError,
    TaskNotFoundError,
    TrackingConflictError,
    TrackingNotFoundError,
)
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.task import Task
from habitual.model.tracking import TrackingRecord
from habitual.template.task import get_task_template
from habitual.template.tracking import get_tracking_template


def make_task(
    unit: str = "ml",
    value: float = 3000,
    task_meta_id: str = "water",
    task_frequency: str = "DAILY",
) -> Task:
    task = get_task_template()
    task["id"] = generate_entity_id()
    task["task_meta_id"] = task_meta_id
    task["unit"] = unit
    task["value"] = value
    task["from_date"] = pendulum.date(2025, 1, 1)
    task["task_frequency"] = task_frequency  # type: ignore[typeddict-item]
    return task


def make_tracking(
    task_id: EntityId, date: pendulum.Date, value: float, unit: str
) -> TrackingRecord:
    tracking = get_tracking_template()
    tracking["id"] = generate_entity_id()
    tracking["task_id"] = task_id
    tracking["date"] = date
    tracking["value"] = value
    tracking["unit"] = unit
    return tracking


class InMemoryTrackingStore:
    def __init__(self) -> None:
        self.tasks: dict[EntityId, Task] = {}
        self.trackings: list[TrackingRecord] = []
        self.writes: list[tuple[str, EntityId, pendulum.Date, float, str]] = []
        self.fail_writes: Optional[Exception] = None
        self.fail_reads: Optional[Exception] = None
        self.before_create: Optional[Callable[[], None]] = None

    def add_task(self, task: Task) -> Task:
        assert task["id"] is not None
        self.tasks[task["id"]] = task
        return task

    def add_tracking(self, tracking: TrackingRecord) -> TrackingRecord:
        self.trackings.append(tracking)
        return tracking

    async def get_task(self, task_id: EntityId) -> Task:
        if self.fail_reads is not None:
            raise self.fail_reads
        if task_id not in self.tasks:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        return deepcopy(self.tasks[task_id])

    async def find_trackings(
        self, task_id: EntityId, date: pendulum.Date
    ) -> list[TrackingRecord]:
        if self.fail_reads is not None:
            raise self.fail_reads
        return deepcopy(
            [t for t in self.trackings if t["task_id"] == task_id and t["date"] == date]
        )

    async def create_tracking(
        self, task_id: EntityId, date: pendulum.Date, value: float, unit: str
    ) -> TrackingRecord:
        if self.fail_writes is not None:
            raise self.fail_writes
        await self.get_task(task_id)
        if self.before_create is not None:
            self.before_create()
        if await self.find_trackings(task_id, date):
            raise TrackingConflictError("Task tracking already exists for this date")
        self.writes.append(("create", task_id, date, value, unit))
        return deepcopy(self.add_tracking(make_tracking(task_id, date, value, unit)))

    async def update_tracking(
        self,
        id: EntityId,
        task_id: EntityId,
        date: pendulum.Date,
        value: float,
        unit: str,
    ) -> TrackingRecord:
        if self.fail_writes is not None:
            raise self.fail_writes
        for tracking in self.trackings:
            if tracking["id"] == id and tracking["task_id"] == task_id:
                taken = await self.find_trackings(task_id, date)
                if any(other["id"] != id for other in taken):
                    raise TrackingConflictError(
                        "Task tracking already exists for this date"
                    )
                self.writes.append(("update", task_id, date, value, unit))
                tracking["date"] = date
                tracking["value"] = value
                tracking["unit"] = unit
                tracking["updated"] = pendulum.now("UTC")
                return deepcopy(tracking)
        raise TrackingNotFoundError("Task tracking record not found")


STORE_DOWN = StoreError("connection reset")


@dataclass
class ManualTimer:
    due: float
    callback: Callable[[], Awaitable[None]]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualTimers:
    now: float = 0.0
    timers: list[ManualTimer] = field(default_factory=list)

    def __call__(
        self, delay: float, callback: Callable[[], Awaitable[None]]
    ) -> ManualTimer:
        timer = ManualTimer(due=self.now + delay, callback=callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    async def advance(self, seconds: float) -> None:
        """Move time forward, firing due timers in order."""
        self.now += seconds
        while True:
            due = sorted(
                (t for t in self.active if t.due <= self.now), key=lambda t: t.due
            )
            if not due:
                return
            timer = due[0]
            timer.fired = True
            await timer.callback()
