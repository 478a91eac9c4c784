# SPDX-License-Identifier: MIT

from habitual.model.entity_id import UNSET_ENTITY_ID
from habitual.model.entity_type import EntityType
from habitual.model.tracking import TrackingRecord
from habitual.time import now_utc, today_local


def get_tracking_template() -> TrackingRecord:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.TRACKING,
        "task_id": UNSET_ENTITY_ID,  # Must be set
        "date": today_local(),
        "value": 0,
        "unit": "",
        "created": now,
        "updated": now,
    }
