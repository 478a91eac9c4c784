# SPDX-License-Identifier: MIT

from typing import Optional


class HabitualError(Exception):
    """
    Base class for every failure the core surfaces to callers.

    `status` follows HTTP semantics (4xx client error, 5xx server error) and
    `code` is the stable identifier carried in failure envelopes.
    """

    status: int = 500
    code: str = "INTERNAL"

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code


class TaskNotFoundError(HabitualError):
    """Raised when a task instance does not exist or is not visible."""

    status = 404
    code = "TASK_NOT_FOUND"


class TrackingNotFoundError(HabitualError):
    """Raised when a tracking record does not exist or belongs to another task."""

    status = 404
    code = "TRACKING_NOT_FOUND"


class DataIntegrityError(HabitualError):
    """Raised when more than one tracking record exists for a (task, date) pair."""

    status = 500
    code = "DATA_INTEGRITY"


class TrackingConflictError(HabitualError):
    """Raised when creating a tracking record for a date that already has one."""

    status = 409
    code = "TRACKING_CONFLICT"


class UnitDomainError(HabitualError, ValueError):
    """Raised for unknown units or conversions across unit domains."""

    status = 400
    code = "UNIT_DOMAIN"


class InvalidValueError(HabitualError, ValueError):
    """Raised when a numeric value is not finite or otherwise unusable."""

    status = 400
    code = "INVALID_VALUE"


class TaskValidationError(HabitualError):
    """Raised when task instance input does not fit its task definition."""

    status = 400
    code = "INVALID_TASK"


class StoreError(HabitualError):
    """Raised for transport or storage failures reaching the backing store."""

    status = 500
    code = "STORE_ERROR"


ERRORS_BY_CODE: dict[str, type[HabitualError]] = {
    error_type.code: error_type
    for error_type in (
        TaskNotFoundError,
        TrackingNotFoundError,
        DataIntegrityError,
        TrackingConflictError,
        UnitDomainError,
        InvalidValueError,
        TaskValidationError,
        StoreError,
    )
}
