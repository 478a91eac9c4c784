# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration, time
from habitual.errors import TaskNotFoundError
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.task import Task


class TaskRepository:
    def __init__(self) -> None:
        self._tasks: Optional[list[Task]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        self._tasks = []
        if not configuration.DATA_TASKS_DIR.is_dir():
            return
        for file_path in configuration.DATA_TASKS_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_task = load(file_path.read_text(), Loader=Loader)
            if raw_task is not None:
                self._tasks.append(self.__convert_task_for_deserialization(raw_task))

    def __save_data(self) -> None:
        configuration.DATA_TASKS_DIR.mkdir(parents=True, exist_ok=True)
        for task in self.tasks:
            if task["id"] in self._dirty_ids:
                serializable_task = self.__convert_task_for_serialization(
                    deepcopy(task)
                )
                file_path = configuration.DATA_TASKS_DIR / f"{task['id']}.yaml"
                file_path.write_text(dump(serializable_task, Dumper=Dumper))

        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["from_date"] = time.date_to_str(
            serializable_task["from_date"]
        )
        serializable_task["to_date"] = time.date_to_str_optional(
            serializable_task["to_date"]
        )
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["updated"] = time.datetime_to_iso_str(
            serializable_task["updated"]
        )
        serializable_task["deleted"] = time.datetime_to_iso_str_optional(
            serializable_task["deleted"]
        )
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["from_date"] = time.date_from_str(
            str(deserializable_task["from_date"])
        )
        deserializable_task["to_date"] = time.date_from_str_optional(
            None
            if deserializable_task["to_date"] is None
            else str(deserializable_task["to_date"])
        )
        deserializable_task["created"] = time.datetime_from_str(
            deserializable_task["created"]
        )
        deserializable_task["updated"] = time.datetime_from_str(
            deserializable_task["updated"]
        )
        deserializable_task["deleted"] = time.datetime_from_str_optional(
            deserializable_task["deleted"]
        )
        return cast(Task, deserializable_task)

    def save_new_task(self, task: Task) -> EntityId:
        self.is_dirty = True

        task["id"] = generate_entity_id()

        # Deduplicate tags
        if task["tags"] is not None:
            task["tags"] = list(dict.fromkeys(task["tags"]))

        self.tasks.append(task)
        self._dirty_ids.add(task["id"])

        return task["id"]

    def modify_task(
        self,
        id: EntityId,
        unit: Optional[str],
        value: Optional[float],
        from_date: Optional[pendulum.Date],
        to_date: Optional[pendulum.Date],
        task_frequency: Optional[str],
        description: Optional[str],
        tags: Optional[list[str]],
        deleted: Optional[pendulum.DateTime],
        remove_to_date: bool,
        remove_description: bool,
        remove_tags: bool,
    ) -> None:
        task = self.__find_task(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        task["updated"] = time.now_utc()
        if unit is not None:
            task["unit"] = unit
        if value is not None:
            task["value"] = value
        if from_date is not None:
            task["from_date"] = from_date
        if to_date is not None:
            task["to_date"] = to_date
        if task_frequency is not None:
            task["task_frequency"] = task_frequency  # type: ignore[typeddict-item]
        if description is not None:
            task["description"] = description
        if tags is not None:
            task["tags"] = list(dict.fromkeys(tags))
        if deleted is not None:
            task["deleted"] = deleted

        if remove_to_date:
            task["to_date"] = None
        if remove_description:
            task["description"] = None
        if remove_tags:
            task["tags"] = None

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(self.tasks)

    def get_task(self, id: EntityId) -> Task:
        return deepcopy(self.__find_task(id))

    def __find_task(self, id: EntityId) -> Task:
        for task in self.tasks:
            if task["id"] == id:
                return task
        raise TaskNotFoundError(f"Task not found: {id}")


TASK_REPO = TaskRepository()
