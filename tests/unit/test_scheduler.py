"""Tests for habitual/service/scheduler.py"""

import asyncio
import logging

import pendulum
import pytest

from habitual.service.scheduler import DebouncedWriteScheduler, WriteTarget


class Recorder:
    """Collects the writes the scheduler hands out."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, WriteTarget]] = []

    async def __call__(self, value: float, target: WriteTarget) -> None:
        self.calls.append((value, target))


DAY = pendulum.date(2025, 3, 4)


def target(task_id: str = "task-1", record_id: str = "", date=DAY) -> WriteTarget:
    return WriteTarget(record_id=record_id, task_id=task_id, date=date)


class TestWriteTarget:
    def test_same_record_id_matches(self):
        assert target(record_id="r1").matches(target(task_id="other", record_id="r1"))

    def test_same_task_and_date_matches(self):
        assert target().matches(target(record_id="r1"))

    def test_other_date_does_not_match(self):
        assert not target().matches(target(date=DAY.add(days=1)))


class TestDebouncedWriteScheduler:
    @pytest.mark.asyncio
    async def test_burst_is_written_once_with_last_value(self, scheduler, timers):
        write = Recorder()

        for value in (200, 400, 600):
            scheduler.schedule_write(value, target(), write)
            await timers.advance(1.0)

        assert write.calls == []

        await timers.advance(3.0)

        assert write.calls == [(600, target())]
        assert scheduler.pending_targets == []

    @pytest.mark.asyncio
    async def test_nothing_written_before_window_closes(self, scheduler, timers):
        write = Recorder()

        scheduler.schedule_write(1, target(), write)
        await timers.advance(2.9)

        assert write.calls == []
        assert len(timers.active) == 1

    @pytest.mark.asyncio
    async def test_each_change_restarts_the_window(self, scheduler, timers):
        write = Recorder()

        scheduler.schedule_write(1, target(), write)
        await timers.advance(2.0)
        scheduler.schedule_write(2, target(), write)
        await timers.advance(2.0)

        assert write.calls == []

        await timers.advance(1.0)

        assert write.calls == [(2, target())]

    @pytest.mark.asyncio
    async def test_independent_targets(self, scheduler, timers):
        write = Recorder()
        first = target(task_id="task-1")
        second = target(task_id="task-2")

        scheduler.schedule_write(10, first, write)
        scheduler.schedule_write(20, second, write)
        await timers.advance(3.0)

        assert sorted(write.calls, key=lambda c: c[0]) == [(10, first), (20, second)]

    @pytest.mark.asyncio
    async def test_flush_writes_pending_immediately(self, scheduler, timers):
        write = Recorder()

        scheduler.schedule_write(5, target(), write)
        await scheduler.flush()

        assert write.calls == [(5, target())]
        assert timers.active == []

        # The cancelled timer must not write a second time
        await timers.advance(10.0)
        assert len(write.calls) == 1

    @pytest.mark.asyncio
    async def test_failed_write_is_logged(self, scheduler, timers, caplog):
        async def failing(value: float, write_target: WriteTarget) -> None:
            raise RuntimeError("boom")

        scheduler.schedule_write(5, target(), failing)
        with caplog.at_level(logging.ERROR, logger="habitual"):
            await timers.advance(3.0)

        assert "Failed to persist" in caplog.text
        assert scheduler.pending_targets == []

    @pytest.mark.asyncio
    async def test_flush_waits_for_write_already_running(self):
        """A write whose window closed but is still suspended must finish."""
        written: list[float] = []

        async def slow_write(value: float, write_target: WriteTarget) -> None:
            await asyncio.sleep(0.05)
            written.append(value)

        scheduler = DebouncedWriteScheduler(delay=0.01)
        scheduler.schedule_write(7, target(), slow_write)
        await asyncio.sleep(0.02)
        assert scheduler.pending_targets == []

        await scheduler.flush()

        assert written == [7]

    @pytest.mark.asyncio
    async def test_flush_waits_for_failing_running_write(self, caplog):
        async def slow_failure(value: float, write_target: WriteTarget) -> None:
            await asyncio.sleep(0.05)
            raise RuntimeError("boom")

        scheduler = DebouncedWriteScheduler(delay=0.01)
        scheduler.schedule_write(7, target(), slow_failure)
        await asyncio.sleep(0.02)

        await scheduler.flush()

        assert "Failed to persist" in caplog.text

    @pytest.mark.asyncio
    async def test_asyncio_timer(self):
        write = Recorder()
        scheduler = DebouncedWriteScheduler(delay=0.01)

        scheduler.schedule_write(1, target(), write)
        scheduler.schedule_write(2, target(), write)
        await asyncio.sleep(0.1)

        assert write.calls == [(2, target())]
