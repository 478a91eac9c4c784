# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId


class TrackingRecord(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "tracking"
    task_id: EntityId
    date: pendulum.Date  # Calendar date the progress belongs to

    # Achieved amount in the record's own unit, which may lag behind the
    # task's current unit if the task was edited after tracking.
    value: float
    unit: str

    created: pendulum.DateTime
    updated: pendulum.DateTime
