# SPDX-License-Identifier: MIT

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Union

from habitual.errors import InvalidValueError, UnitDomainError

UnitDomain = Literal["volume", "time"]

# Volume base unit: millilitre
VOLUME_TO_BASE: dict[str, float] = {
    "ml": 1,
    "l": 1000,
    "gallon": 3785.411784,  # US liquid gallon
}

# Time base unit: minute
TIME_TO_BASE: dict[str, float] = {
    "min": 1,
    "hours": 60,
}

UNIT_ALIASES: dict[str, str] = {
    "minutes": "min",
    "mins": "min",
    "hour": "hours",
    "hrs": "hours",
}

PRECISION = Decimal("0.001")


def normalize_unit(unit: str) -> str:
    return UNIT_ALIASES.get(unit, unit)


def get_domain(unit: str) -> UnitDomain:
    canonical = normalize_unit(unit)
    if canonical in VOLUME_TO_BASE:
        return "volume"
    if canonical in TIME_TO_BASE:
        return "time"
    raise UnitDomainError(f"Unsupported unit: {unit}")


def is_convertible(from_unit: str, to_unit: str) -> bool:
    """True when a value can be converted between the two units."""
    if normalize_unit(from_unit) == normalize_unit(to_unit):
        return True
    try:
        return get_domain(from_unit) == get_domain(to_unit)
    except UnitDomainError:
        return False


def round3(value: float) -> float:
    """Round half away from zero to 3 decimals, dropping binary float noise."""
    return float(Decimal(repr(value)).quantize(PRECISION, rounding=ROUND_HALF_UP))


def convert_unit(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert `value` from one unit to another within the same unit domain.

    Units that are equal (after alias normalisation) are returned rounded
    without a domain lookup, so units outside every domain such as "steps"
    pass through. Conversions across domains raise UnitDomainError.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"Value must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise InvalidValueError("Value must be a finite number")

    if from_unit == to_unit or normalize_unit(from_unit) == normalize_unit(to_unit):
        return round3(value)

    from_domain = get_domain(from_unit)
    to_domain = get_domain(to_unit)
    if from_domain != to_domain:
        raise UnitDomainError(f"Invalid conversion: {from_domain} -> {to_domain}")

    to_base = VOLUME_TO_BASE if from_domain == "volume" else TIME_TO_BASE
    base_value = value * to_base[normalize_unit(from_unit)]
    return round3(base_value / to_base[normalize_unit(to_unit)])


def format_value(value: Union[int, float]) -> str:
    """Render whole numbers without a trailing fractional part."""
    if float(value).is_integer():
        return str(int(value))
    return str(round3(value))
