# SPDX-License-Identifier: MIT


class EntityType:
    TASK_META = "task_meta"
    TASK = "task"
    TRACKING = "tracking"
