# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from habitual import configuration
from habitual.model.task_meta import TaskMeta, TaskMetas


class TaskMetaRepository:
    """Read-only access to the habit catalog."""

    def __init__(self) -> None:
        self._task_metas: Optional[list[TaskMeta]] = None

    @property
    def task_metas(self) -> list[TaskMeta]:
        if self._task_metas is None:
            self.__load_data()
        if self._task_metas is None:
            raise ValueError()
        return self._task_metas

    def __load_data(self) -> None:
        task_metas_data: TaskMetas = load(
            configuration.DATA_TASK_METAS_PATH.read_text(), Loader=Loader
        )
        self._task_metas = task_metas_data["task_metas"]

    def get_all_task_metas(self) -> list[TaskMeta]:
        return deepcopy(self.task_metas)

    def find_task_meta(self, id_or_name: str) -> Optional[TaskMeta]:
        needle = id_or_name.lower()
        for task_meta in self.task_metas:
            if task_meta["id"] == needle or task_meta["name"].lower() == needle:
                return deepcopy(task_meta)
        return None


TASK_META_REPO = TaskMetaRepository()
