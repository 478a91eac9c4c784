# SPDX-License-Identifier: MIT

import logging
import math
from functools import partial

import pendulum

from habitual.errors import InvalidValueError, TrackingConflictError
from habitual.model.entity_id import EntityId
from habitual.model.tracking_view import TrackingView
from habitual.repository.store import TrackingStore
from habitual.service import engine
from habitual.service.resolver import resolve_tracking
from habitual.service.scheduler import DebouncedWriteScheduler, WriteTarget

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    Optimistic, per task+date tracking state.

    The local value changes synchronously on every increment, decrement or
    set; persistence is handed to the debounced scheduler. Nothing here is
    shared between sessions except the scheduler and the store.
    """

    def __init__(
        self,
        store: TrackingStore,
        scheduler: DebouncedWriteScheduler,
        view: TrackingView,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._adopt(view)

    @classmethod
    async def open(
        cls,
        store: TrackingStore,
        scheduler: DebouncedWriteScheduler,
        task_id: EntityId,
        date: pendulum.Date,
    ) -> "TrackingSession":
        view = await resolve_tracking(store, task_id, date)
        return cls(store, scheduler, view)

    @property
    def view(self) -> TrackingView:
        """The last resolved view, carrying the local value and completion."""
        return self._view

    @property
    def value(self) -> float:
        return self._value

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def record_id(self) -> EntityId:
        return self._record_id

    @property
    def task_id(self) -> EntityId:
        return self._task_id

    @property
    def date(self) -> pendulum.Date:
        return self._date

    @property
    def target(self) -> float:
        return self._view["target"]

    @property
    def unit(self) -> str:
        return self._view["unit"]

    def _adopt(self, view: TrackingView) -> None:
        self._view = view
        self._value = view["value"]
        self._completed = view["completed"]
        self._record_id: EntityId = view["id"]
        self._task_id: EntityId = view["task_id"]
        self._date: pendulum.Date = view["date"]

    async def refresh(self) -> TrackingView:
        """Re-resolve from the store, replacing the local state."""
        self._adopt(await resolve_tracking(self._store, self._task_id, self._date))
        return self._view

    async def switch(self, task_id: EntityId, date: pendulum.Date) -> TrackingView:
        """
        Move the session onto another task or date.

        Writes already pending for the previous context are left to fire.
        """
        self._adopt(await resolve_tracking(self._store, task_id, date))
        return self._view

    def increment(self) -> float:
        return self._update(engine.increment_value(self._value))

    def decrement(self) -> float:
        if self._value == 0:
            return self._value
        return self._update(engine.decrement_value(self._value))

    def set_value(self, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise InvalidValueError(
                f"Tracked value must be a non-negative number: {value}"
            )
        return self._update(value)

    def _update(self, value: float) -> float:
        value, completed = engine.apply_target(value, self.target)
        self._value = value
        self._completed = completed
        self._view["value"] = value
        self._view["completed"] = completed

        target = WriteTarget(
            record_id=self._record_id, task_id=self._task_id, date=self._date
        )
        self._scheduler.schedule_write(
            value, target, partial(self._persist, unit=self.unit)
        )
        return value

    async def _persist(self, value: float, target: WriteTarget, unit: str) -> None:
        if target.record_id:
            await self._store.update_tracking(
                target.record_id, target.task_id, target.date, value, unit
            )
            return

        try:
            await self._store.create_tracking(
                target.task_id, target.date, value, unit
            )
        except TrackingConflictError:
            # Someone created the record first; write over it instead
            logger.warning("Tracking for %s already exists, updating instead", target)
            existing = await resolve_tracking(self._store, target.task_id, target.date)
            if not existing["id"]:
                raise
            await self._store.update_tracking(
                existing["id"], target.task_id, target.date, value, unit
            )

        await self._pick_up_record_id(target)

    async def _pick_up_record_id(self, target: WriteTarget) -> None:
        if (target.task_id, target.date) != (self._task_id, self._date):
            return

        view = await resolve_tracking(self._store, target.task_id, target.date)
        if view["kind"] == "tracked":
            # Changes made while the create was in flight stay local
            view["value"] = self._value
            view["completed"] = self._completed
            self._record_id = view["id"]
            self._view = view
