# SPDX-License-Identifier: MIT

from typing import TypedDict


class TaskMeta(TypedDict):
    """Catalog entry describing a kind of habit, e.g. "Water"."""

    id: str  # slug, e.g. "water"
    entity_type: str  # "task_meta"
    name: str
    units: list[str]  # empty for non-measurable habits
    default_target: dict[str, float]  # unit -> default daily target
    category: str  # e.g. "diet", "fitness", "mind"
    color: str
    measurable: bool


class TaskMetas(TypedDict):
    task_metas: list[TaskMeta]
