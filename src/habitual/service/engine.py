# SPDX-License-Identifier: MIT

import math

LARGE_VALUE_THRESHOLD = 5000
LARGE_STEP = 500
MEDIUM_VALUE_THRESHOLD = 1000
MEDIUM_STEP = 200


def step_for(value: float, bucket: int) -> int:
    """
    Step size for `value`, with `bucket` (the rounded value) picking the bracket.

    Small values move by floor(value / 100) + 1 so the first taps are fine
    grained, larger values jump by 200 and then 500.
    """
    if bucket >= LARGE_VALUE_THRESHOLD:
        return LARGE_STEP
    if bucket >= MEDIUM_VALUE_THRESHOLD:
        return MEDIUM_STEP
    return math.floor(value / 100) + 1


def increment_step(value: float) -> int:
    return step_for(value, math.ceil(value))


def decrement_step(value: float) -> int:
    return step_for(value, math.floor(value))


def increment_value(value: float) -> float:
    return value + increment_step(value)


def decrement_value(value: float) -> float:
    """Step down from `value`; a value of 0 stays at 0."""
    if value == 0:
        return value
    return max(0, value - decrement_step(value))


def is_completed(value: float, target: float) -> bool:
    return value >= target


def apply_target(value: float, target: float) -> tuple[float, bool]:
    """
    Clamp `value` to `target` once the goal is met.

    Returns the value to keep and whether the goal is complete.
    """
    if is_completed(value, target):
        return target, True
    return value, False
