# SPDX-License-Identifier: MIT

from typing import Optional

from habitual.service.unit import format_value


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_amount(value: float, unit: str) -> str:
    if unit == "":
        return format_value(value)
    return f"{format_value(value)} {unit}"


def format_progress(value: float, target: float, unit: str) -> str:
    return f"{format_value(value)} / {format_amount(target, unit)}"


def completion_state(completed: bool) -> str:
    return "[green]done[/green]" if completed else ""
