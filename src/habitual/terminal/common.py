# SPDX-License-Identifier: MIT

from typing import NoReturn

import typer

from habitual.errors import HabitualError, TaskNotFoundError
from habitual.model.entity_id import EntityId
from habitual.repository.id_map import ID_MAP_REPO


def resolve_task_id(synthetic_id: int) -> EntityId:
    try:
        return ID_MAP_REPO.get_real_id("tasks", synthetic_id)
    except KeyError:
        raise TaskNotFoundError(f"Task not found: {synthetic_id}")


def exit_with_error(error: HabitualError) -> NoReturn:
    typer.echo(f"Error: {error.message}", err=True)
    raise typer.Exit(1)
