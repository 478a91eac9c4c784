# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict, TypeAlias

EntityType = Literal["tasks"]


IdMapDict: TypeAlias = dict[EntityType, "IdMapMapping"]


class IdMap(TypedDict):
    """
    Dictionaries map synthetic ids (short integers shown in the terminal) to
    real entity ids and back.

    real_task_id = id_map["tasks"]["synthetic_to_real"][7]
    """

    tasks: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, str]
    real_to_synthetic: dict[str, int]
