# SPDX-License-Identifier: MIT

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Protocol, TypeAlias

import pendulum

from habitual.configuration import DEFAULT_DEBOUNCE_SECONDS
from habitual.model.entity_id import EntityId
from habitual.time import date_to_str

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteTarget:
    """
    Identity of the tracking record a write is aimed at.

    `record_id` is "" until the record has been created.
    """

    record_id: EntityId
    task_id: EntityId
    date: pendulum.Date

    def matches(self, other: "WriteTarget") -> bool:
        if self.record_id and self.record_id == other.record_id:
            return True
        return self.task_id == other.task_id and self.date == other.date

    def __str__(self) -> str:
        return f"{self.record_id or '<new>'} ({self.task_id} @ {date_to_str(self.date)})"


WriteCallback: TypeAlias = Callable[[float, WriteTarget], Awaitable[None]]


class Timer(Protocol):
    def cancel(self) -> None: ...


TimerFactory: TypeAlias = Callable[[float, Callable[[], Awaitable[None]]], Timer]


class AsyncioTimer:
    """Runs `callback` as a task on the running loop once `delay` elapses."""

    def __init__(
        self,
        delay: float,
        callback: Callable[[], Awaitable[None]],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._callback = callback
        self._task: Optional[asyncio.Task[None]] = None
        self._handle = self._loop.call_later(delay, self._start)

    def _start(self) -> None:
        self._task = self._loop.create_task(self._callback())

    def cancel(self) -> None:
        # A write that already started is left to finish
        self._handle.cancel()


@dataclass
class PendingWrite:
    target: WriteTarget
    value: float
    write: WriteCallback
    timer: Timer


class DebouncedWriteScheduler:
    """
    Coalesces bursts of value changes into one write per target.

    Each call to `schedule_write` (re)starts the debounce window for its
    target; only the value present when the window closes is written.
    Writes for different targets are independent of each other.
    """

    def __init__(
        self,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self.delay = delay
        self._timer_factory: TimerFactory = (
            timer_factory if timer_factory is not None else AsyncioTimer
        )
        self._pending: list[PendingWrite] = []
        self._in_flight: set[asyncio.Future[None]] = set()

    @property
    def pending_targets(self) -> list[WriteTarget]:
        return [pending.target for pending in self._pending]

    def schedule_write(
        self, value: float, target: WriteTarget, write: WriteCallback
    ) -> None:
        for pending in list(self._pending):
            if pending.target.matches(target):
                pending.timer.cancel()
                self._pending.remove(pending)
                logger.debug("Restarting debounce for %s", target)

        pending_write: Optional[PendingWrite] = None

        async def fire() -> None:
            if pending_write is not None:
                await self._run(pending_write)

        pending_write = PendingWrite(
            target=target,
            value=value,
            write=write,
            timer=self._timer_factory(self.delay, fire),
        )
        self._pending.append(pending_write)

    async def flush(self) -> None:
        """
        Run every pending write now instead of waiting for its window.

        Writes whose window already closed are awaited as well, so nothing is
        left running once this returns.
        """
        while self._pending:
            pending = self._pending[0]
            pending.timer.cancel()
            await self._run(pending)

        while self._in_flight:
            await asyncio.wait(list(self._in_flight))
            # Let each writer log its outcome and drop out of the set
            await asyncio.sleep(0)

    async def _run(self, pending: PendingWrite) -> None:
        if pending not in self._pending:
            return
        self._pending.remove(pending)

        logger.debug("Writing %s to %s", pending.value, pending.target)
        write = asyncio.ensure_future(pending.write(pending.value, pending.target))
        self._in_flight.add(write)
        try:
            await write
        except Exception:
            # Local state stays as the user left it; the next change retries
            logger.exception("Failed to persist tracking value for %s", pending.target)
        finally:
            self._in_flight.discard(write)
