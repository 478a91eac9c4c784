"""Tests for the YAML-backed repositories and LocalTrackingStore"""

import pendulum
import pytest

from habitual.errors import (
    TaskNotFoundError,
    TrackingConflictError,
    TrackingNotFoundError,
)
from habitual.repository.id_map import IdMapRepository
from habitual.repository.store import LocalTrackingStore
from habitual.repository.task import TaskRepository
from habitual.repository.task_meta import TaskMetaRepository
from habitual.repository.tracking import TrackingRepository
from habitual.service.task import create_task_from_meta
from habitual.template.task_meta import get_default_task_metas
from tests.fakes import make_tracking


def water_task(**kwargs):
    water = next(m for m in get_default_task_metas() if m["id"] == "water")
    return create_task_from_meta(water, **kwargs)


class TestTaskRepository:
    def test_tasks_survive_reload(self, task_repo, data_dir):
        task_id = task_repo.save_new_task(
            water_task(to_date=pendulum.date(2025, 12, 31), tags=["health", "health"])
        )
        assert task_repo.flush() is True
        assert (data_dir / "tasks" / f"{task_id}.yaml").is_file()

        reloaded = TaskRepository().get_task(task_id)

        assert reloaded["unit"] == "ml"
        assert reloaded["value"] == 3000
        assert reloaded["to_date"] == pendulum.date(2025, 12, 31)
        assert reloaded["tags"] == ["health"]
        assert isinstance(reloaded["created"], pendulum.DateTime)

    def test_flush_without_changes(self, task_repo):
        assert task_repo.flush() is False

    def test_modify_task(self, task_repo):
        task_id = task_repo.save_new_task(water_task(description="hydrate"))

        task_repo.modify_task(
            task_id,
            unit="l",
            value=2.5,
            from_date=None,
            to_date=None,
            task_frequency="WEEKLY",
            description=None,
            tags=None,
            deleted=None,
            remove_to_date=False,
            remove_description=True,
            remove_tags=False,
        )

        task = task_repo.get_task(task_id)
        assert task["unit"] == "l"
        assert task["value"] == 2.5
        assert task["task_frequency"] == "WEEKLY"
        assert task["description"] is None

    def test_get_task_returns_a_copy(self, task_repo):
        task_id = task_repo.save_new_task(water_task())

        task_repo.get_task(task_id)["value"] = 1

        assert task_repo.get_task(task_id)["value"] == 3000

    def test_unknown_task(self, task_repo):
        with pytest.raises(TaskNotFoundError):
            task_repo.get_task("missing")


class TestTrackingRepository:
    def test_trackings_survive_reload(self, tracking_repo, day):
        tracking_id = tracking_repo.save_new_tracking(
            make_tracking("task-1", day, 1.5, "l")
        )
        tracking_repo.flush()

        reloaded = TrackingRepository().find_trackings("task-1", day)

        assert len(reloaded) == 1
        assert reloaded[0]["id"] == tracking_id
        assert reloaded[0]["value"] == 1.5
        assert reloaded[0]["date"] == day

    def test_one_record_per_task_and_date(self, tracking_repo, day):
        tracking_repo.save_new_tracking(make_tracking("task-1", day, 1, "ml"))

        with pytest.raises(TrackingConflictError):
            tracking_repo.save_new_tracking(make_tracking("task-1", day, 2, "ml"))

        tracking_repo.save_new_tracking(make_tracking("task-2", day, 2, "ml"))
        tracking_repo.save_new_tracking(
            make_tracking("task-1", day.add(days=1), 2, "ml")
        )
        assert len(tracking_repo.find_trackings("task-1", day)) == 1
        assert len(tracking_repo.find_trackings("task-1", day.add(days=1))) == 1

    def test_modify_tracking(self, tracking_repo, day):
        tracking_id = tracking_repo.save_new_tracking(
            make_tracking("task-1", day, 1, "ml")
        )

        tracking_repo.modify_tracking(tracking_id, None, 250, "ml")

        assert tracking_repo.get_tracking(tracking_id)["value"] == 250

    def test_moving_onto_a_taken_date_conflicts(self, tracking_repo, day):
        tracking_repo.save_new_tracking(make_tracking("task-1", day, 1, "ml"))
        other_id = tracking_repo.save_new_tracking(
            make_tracking("task-1", day.add(days=1), 2, "ml")
        )

        with pytest.raises(TrackingConflictError):
            tracking_repo.modify_tracking(other_id, day, 3, "ml")

        assert len(tracking_repo.find_trackings("task-1", day)) == 1
        assert tracking_repo.get_tracking(other_id)["value"] == 2

    def test_moving_onto_own_or_foreign_date(self, tracking_repo, day):
        tracking_id = tracking_repo.save_new_tracking(
            make_tracking("task-1", day, 1, "ml")
        )
        tracking_repo.save_new_tracking(
            make_tracking("task-2", day.add(days=1), 1, "ml")
        )

        tracking_repo.modify_tracking(tracking_id, day, 5, "ml")
        tracking_repo.modify_tracking(tracking_id, day.add(days=1), 6, "ml")

        assert tracking_repo.get_tracking(tracking_id)["date"] == day.add(days=1)

    def test_unknown_tracking(self, tracking_repo):
        with pytest.raises(TrackingNotFoundError):
            tracking_repo.get_tracking("missing")


class TestLocalTrackingStore:
    @pytest.mark.asyncio
    async def test_create_and_update_flush_to_disk(
        self, task_repo, tracking_repo, data_dir, day
    ):
        task_id = task_repo.save_new_task(water_task())
        store = LocalTrackingStore(task_repo, tracking_repo)

        created = await store.create_tracking(task_id, day, 100, "ml")
        await store.update_tracking(created["id"], task_id, day, 300, "ml")

        assert (data_dir / "trackings" / f"{created['id']}.yaml").is_file()
        on_disk = TrackingRepository().get_tracking(created["id"])
        assert on_disk["value"] == 300

    @pytest.mark.asyncio
    async def test_update_cannot_duplicate_a_date(
        self, task_repo, tracking_repo, day
    ):
        task_id = task_repo.save_new_task(water_task())
        store = LocalTrackingStore(task_repo, tracking_repo)
        await store.create_tracking(task_id, day, 100, "ml")
        second = await store.create_tracking(task_id, day.add(days=1), 200, "ml")

        with pytest.raises(TrackingConflictError):
            await store.update_tracking(second["id"], task_id, day, 300, "ml")

        assert len(await store.find_trackings(task_id, day)) == 1

    @pytest.mark.asyncio
    async def test_create_requires_task(self, task_repo, tracking_repo, day):
        store = LocalTrackingStore(task_repo, tracking_repo)

        with pytest.raises(TaskNotFoundError):
            await store.create_tracking("missing", day, 1, "ml")

    @pytest.mark.asyncio
    async def test_update_rejects_record_of_other_task(
        self, task_repo, tracking_repo, day
    ):
        first = task_repo.save_new_task(water_task())
        second = task_repo.save_new_task(water_task())
        store = LocalTrackingStore(task_repo, tracking_repo)
        created = await store.create_tracking(first, day, 100, "ml")

        with pytest.raises(TrackingNotFoundError):
            await store.update_tracking(created["id"], second, day, 5, "ml")


class TestTaskMetaRepository:
    def test_seeded_catalog(self, data_dir):
        repo = TaskMetaRepository()

        assert len(repo.get_all_task_metas()) == 10
        assert repo.find_task_meta("Water")["units"] == ["ml", "l"]
        assert repo.find_task_meta("cold-shower")["measurable"] is False
        assert repo.find_task_meta("swimming") is None


class TestIdMapRepository:
    def test_short_ids(self, data_dir):
        repo = IdMapRepository()

        short_id = repo.associate_id("tasks", "abc-123")

        assert repo.get_real_id("tasks", short_id) == "abc-123"
        assert repo.associate_id("tasks", "abc-123") == short_id

        repo.clear_ids()
        with pytest.raises(KeyError):
            repo.get_real_id("tasks", short_id)
