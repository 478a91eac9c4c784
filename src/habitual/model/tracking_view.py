# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, Union, TypeAlias

import pendulum

from habitual.model.entity_id import EntityId
from habitual.model.task import Task


class TrackedView(TypedDict):
    kind: Literal["tracked"]
    id: EntityId
    task_id: EntityId
    date: pendulum.Date
    value: float  # Converted into task_details["unit"] and clamped to target
    unit: str
    target: float
    completed: bool
    task_not_found: Literal[False]
    task_details: Task
    created_time: str
    date_formatted: str
    updated_time: str


class UntrackedView(TypedDict):
    kind: Literal["not_tracked"]
    id: Literal[""]
    task_id: EntityId
    date: pendulum.Date
    value: float
    unit: str
    target: float
    completed: bool
    task_not_found: Literal[True]
    task_details: Task
    created_time: str
    date_formatted: Optional[str]  # always None, nothing tracked yet
    updated_time: Optional[str]  # always None, nothing tracked yet


TrackingView: TypeAlias = Union[TrackedView, UntrackedView]
