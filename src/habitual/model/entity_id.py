# SPDX-License-Identifier: MIT

from typing import TypeAlias

import uuid

EntityId: TypeAlias = str

UNSET_ENTITY_ID: EntityId = "00000000-0000-0000-0000-000000000000"


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
