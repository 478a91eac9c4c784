# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def date_to_str(date: pendulum.Date) -> str:
    """Convert a pendulum.Date to a 'YYYY-MM-DD' string."""
    return date.to_date_string()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string (or a full ISO timestamp) into a pendulum.Date."""
    parsed = pendulum.parse(date_str, tz="local")
    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_tz("local").date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"Not a date: {date_str}")


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def datetime_to_display_str(datetime: pendulum.DateTime) -> str:
    """e.g. 'Mar 4, 2025 9:05 PM' in local time."""
    return datetime.in_tz("local").format("MMM D, YYYY h:mm A")


def datetime_to_display_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_str(datetime)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("MMM D, YYYY ddd")
