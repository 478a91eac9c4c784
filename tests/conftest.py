"""Shared test fixtures for habitual tests.

- store / timers / scheduler: in-memory engine collaborators
- data_dir: an isolated YAML data directory with fresh repositories
"""

from collections.abc import Generator
from pathlib import Path

import pendulum
import pytest

from habitual import configuration
from habitual.initialize import ensure_data_files
from habitual.repository.task import TaskRepository
from habitual.repository.tracking import TrackingRepository
from habitual.service.scheduler import DebouncedWriteScheduler
from tests.fakes import InMemoryTrackingStore, ManualTimers


@pytest.fixture
def store() -> InMemoryTrackingStore:
    return InMemoryTrackingStore()


@pytest.fixture
def timers() -> ManualTimers:
    return ManualTimers()


@pytest.fixture
def scheduler(timers: ManualTimers) -> DebouncedWriteScheduler:
    return DebouncedWriteScheduler(delay=3.0, timer_factory=timers)


@pytest.fixture
def day() -> pendulum.Date:
    return pendulum.date(2025, 3, 4)


@pytest.fixture
def data_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point the data paths at a temporary directory for the test."""
    previous = configuration.DATA_PATH
    data_path = tmp_path / "data"
    data_path.mkdir()
    configuration.set_data_path(data_path)
    ensure_data_files()

    yield data_path

    configuration.set_data_path(previous)


@pytest.fixture
def task_repo(data_dir: Path) -> TaskRepository:
    return TaskRepository()


@pytest.fixture
def tracking_repo(data_dir: Path) -> TrackingRepository:
    return TrackingRepository()
