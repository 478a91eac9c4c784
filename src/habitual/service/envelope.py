# SPDX-License-Identifier: MIT

import logging
from typing import Any, Awaitable, Callable, TypeAlias

import pendulum

from habitual.errors import ERRORS_BY_CODE, HabitualError, StoreError
from habitual.model.entity_id import EntityId
from habitual.model.envelope import ApiFail, ApiOk, Envelope
from habitual.model.task import Task
from habitual.model.tracking import TrackingRecord
from habitual.repository.store import TrackingStore

logger = logging.getLogger(__name__)

Transport: TypeAlias = Callable[[str, dict[str, Any]], Awaitable[Envelope]]


def ok(data: Any) -> ApiOk:
    return {"ok": True, "data": data}


def fail(message: str, status: int = 400, code: str | None = None) -> ApiFail:
    return {"ok": False, "error": message, "code": code, "status": status}


async def to_envelope(outcome: Awaitable[Any]) -> Envelope:
    """Await `outcome` and fold its result or failure into an envelope."""
    try:
        return ok(await outcome)
    except HabitualError as e:
        return fail(e.message, e.status, e.code)
    except Exception:
        logger.exception("Unhandled store error")
        return fail("Internal server error", 500, "INTERNAL")


def unwrap(envelope: Envelope) -> Any:
    """Return the payload of a success envelope, or raise the matching error."""
    if envelope["ok"]:
        return envelope["data"]

    code = envelope.get("code")
    error_type = ERRORS_BY_CODE.get(code) if code is not None else None
    if error_type is None:
        raise StoreError(envelope["error"], envelope["status"], code or "STORE_ERROR")
    raise error_type(envelope["error"], envelope["status"])


def serve(store: TrackingStore) -> Transport:
    """Expose a store as a request/response transport answering in envelopes."""

    async def transport(operation: str, payload: dict[str, Any]) -> Envelope:
        if operation == "get_task":
            return await to_envelope(store.get_task(payload["task_id"]))
        if operation == "find_trackings":
            return await to_envelope(
                store.find_trackings(payload["task_id"], payload["date"])
            )
        if operation == "create_tracking":
            return await to_envelope(
                store.create_tracking(
                    payload["task_id"],
                    payload["date"],
                    payload["value"],
                    payload["unit"],
                )
            )
        if operation == "update_tracking":
            return await to_envelope(
                store.update_tracking(
                    payload["id"],
                    payload["task_id"],
                    payload["date"],
                    payload["value"],
                    payload["unit"],
                )
            )
        return fail(f"Unknown operation: {operation}", 400, "INVALID_REQUEST")

    return transport


class EnvelopeTrackingStore:
    """TrackingStore client talking to a transport that answers in envelopes."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def get_task(self, task_id: EntityId) -> Task:
        return unwrap(await self._transport("get_task", {"task_id": task_id}))

    async def find_trackings(
        self, task_id: EntityId, date: pendulum.Date
    ) -> list[TrackingRecord]:
        return unwrap(
            await self._transport("find_trackings", {"task_id": task_id, "date": date})
        )

    async def create_tracking(
        self, task_id: EntityId, date: pendulum.Date, value: float, unit: str
    ) -> TrackingRecord:
        return unwrap(
            await self._transport(
                "create_tracking",
                {"task_id": task_id, "date": date, "value": value, "unit": unit},
            )
        )

    async def update_tracking(
        self,
        id: EntityId,
        task_id: EntityId,
        date: pendulum.Date,
        value: float,
        unit: str,
    ) -> TrackingRecord:
        return unwrap(
            await self._transport(
                "update_tracking",
                {
                    "id": id,
                    "task_id": task_id,
                    "date": date,
                    "value": value,
                    "unit": unit,
                },
            )
        )
