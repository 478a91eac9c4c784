# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId

TaskFrequency = Literal["DAILY", "WEEKLY"]


class Task(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "task"
    task_meta_id: str  # Reference to the catalog entry
    unit: str  # "" for non-measurable habits
    value: float  # Target per period, in `unit`
    from_date: pendulum.Date
    to_date: Optional[pendulum.Date]  # None = open-ended
    task_frequency: TaskFrequency
    description: Optional[str]
    tags: Optional[list[str]]
    created: pendulum.DateTime
    updated: pendulum.DateTime
    deleted: Optional[pendulum.DateTime]  # Soft delete
