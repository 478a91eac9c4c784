"""Tests for habitual/service/resolver.py"""

import pytest

from habitual.errors import DataIntegrityError, StoreError, TaskNotFoundError
from habitual.service.resolver import resolve_tracking
from tests.fakes import STORE_DOWN, make_task, make_tracking


class TestResolveTracking:
    @pytest.mark.asyncio
    async def test_untracked_date(self, store, day):
        """No record for the date is a normal state, not an error."""
        task = store.add_task(make_task(unit="ml", value=3000))

        view = await resolve_tracking(store, task["id"], day)

        assert view["kind"] == "not_tracked"
        assert view["id"] == ""
        assert view["value"] == 0
        assert view["completed"] is False
        assert view["task_not_found"] is True
        assert view["unit"] == "ml"
        assert view["target"] == 3000

    @pytest.mark.asyncio
    async def test_tracked_same_unit(self, store, day):
        task = store.add_task(make_task(unit="ml", value=3000))
        tracking = store.add_tracking(make_tracking(task["id"], day, 1200, "ml"))

        view = await resolve_tracking(store, task["id"], day)

        assert view["kind"] == "tracked"
        assert view["id"] == tracking["id"]
        assert view["value"] == 1200
        assert view["completed"] is False
        assert view["task_not_found"] is False
        assert view["date_formatted"] is not None

    @pytest.mark.asyncio
    async def test_stored_value_is_converted_to_task_unit(self, store, day):
        task = store.add_task(make_task(unit="ml", value=3000))
        store.add_tracking(make_tracking(task["id"], day, 2, "l"))

        view = await resolve_tracking(store, task["id"], day)

        assert view["value"] == 2000
        assert view["unit"] == "ml"
        assert view["completed"] is False

    @pytest.mark.asyncio
    async def test_converted_value_over_target_is_clamped(self, store, day):
        task = store.add_task(make_task(unit="l", value=3))
        store.add_tracking(make_tracking(task["id"], day, 3500, "ml"))

        view = await resolve_tracking(store, task["id"], day)

        assert view["value"] == 3
        assert view["completed"] is True

    @pytest.mark.asyncio
    async def test_time_units(self, store, day):
        task = store.add_task(make_task(unit="hours", value=8, task_meta_id="sleep"))
        store.add_tracking(make_tracking(task["id"], day, 450, "min"))

        view = await resolve_tracking(store, task["id"], day)

        assert view["value"] == 7.5
        assert view["completed"] is False

    @pytest.mark.asyncio
    async def test_duplicate_records_are_an_integrity_error(self, store, day):
        task = store.add_task(make_task())
        store.add_tracking(make_tracking(task["id"], day, 100, "ml"))
        store.add_tracking(make_tracking(task["id"], day, 200, "ml"))

        with pytest.raises(DataIntegrityError):
            await resolve_tracking(store, task["id"], day)

    @pytest.mark.asyncio
    async def test_other_dates_are_ignored(self, store, day):
        task = store.add_task(make_task())
        store.add_tracking(make_tracking(task["id"], day.add(days=1), 500, "ml"))

        view = await resolve_tracking(store, task["id"], day)

        assert view["kind"] == "not_tracked"

    @pytest.mark.asyncio
    async def test_unknown_task(self, store, day):
        with pytest.raises(TaskNotFoundError):
            await resolve_tracking(store, "missing", day)

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, store, day):
        task = store.add_task(make_task())
        store.fail_reads = STORE_DOWN

        with pytest.raises(StoreError, match="connection reset"):
            await resolve_tracking(store, task["id"], day)
