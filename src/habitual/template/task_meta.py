# SPDX-License-Identifier: MIT

from habitual.model.entity_type import EntityType
from habitual.model.task_meta import TaskMeta


def _task_meta(
    id: str,
    name: str,
    default_target: dict[str, float],
    category: str,
    color: str,
) -> TaskMeta:
    return {
        "id": id,
        "entity_type": EntityType.TASK_META,
        "name": name,
        "units": list(default_target.keys()),
        "default_target": default_target,
        "category": category,
        "color": color,
        "measurable": len(default_target) > 0,
    }


def get_default_task_metas() -> list[TaskMeta]:
    """The built-in habit catalog seeded on first run."""
    return [
        _task_meta("water", "Water", {"ml": 3000, "l": 3}, "diet", "#E91E63"),
        _task_meta("gym", "Gym", {"minutes": 60}, "fitness", "#4CAF50"),
        _task_meta(
            "walk",
            "Walk",
            {"steps": 8000, "minutes": 60, "km": 5},
            "fitness",
            "#FF5722",
        ),
        _task_meta("run", "Run", {"km": 5, "minutes": 30}, "fitness", "#2196F3"),
        _task_meta("meditation", "Meditation", {"minutes": 15}, "mind", "#9C27B0"),
        _task_meta("stretching", "Stretching", {"minutes": 10}, "fitness", "#00BCD4"),
        _task_meta("sleep", "Sleep", {"hours": 8}, "lifestyle", "#3F51B5"),
        _task_meta("reading", "Reading", {"minutes": 30}, "mind", "#795548"),
        _task_meta("cold-shower", "Cold shower", {}, "lifestyle", "#03A9F4"),
        _task_meta("skincare", "Skincare", {}, "lifestyle", "#FFC107"),
    ]
