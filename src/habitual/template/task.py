# SPDX-License-Identifier: MIT

from habitual.model.entity_type import EntityType
from habitual.model.task import Task
from habitual.time import now_utc, today_local


def get_task_template() -> Task:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.TASK,
        "task_meta_id": "",  # Must be set
        "unit": "",
        "value": 0,
        "from_date": today_local(),
        "to_date": None,
        "task_frequency": "DAILY",
        "description": None,
        "tags": None,
        "created": now,
        "updated": now,
        "deleted": None,
    }
