# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration, time
from habitual.errors import TrackingConflictError, TrackingNotFoundError
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.tracking import TrackingRecord


class TrackingRepository:
    """
    One YAML file per tracking record.

    Owns the one-record-per-(task, date) rule: `save_new_tracking` refuses a
    second record for a date that already has one.
    """

    def __init__(self) -> None:
        self._trackings: Optional[list[TrackingRecord]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def trackings(self) -> list[TrackingRecord]:
        if self._trackings is None:
            self.__load_data()
        if self._trackings is None:
            raise ValueError()
        return self._trackings

    def __load_data(self) -> None:
        self._trackings = []
        if not configuration.DATA_TRACKINGS_DIR.is_dir():
            return
        for file_path in configuration.DATA_TRACKINGS_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_tracking = load(file_path.read_text(), Loader=Loader)
            if raw_tracking is not None:
                self._trackings.append(
                    self.__convert_tracking_for_deserialization(raw_tracking)
                )

    def __save_data(self) -> None:
        configuration.DATA_TRACKINGS_DIR.mkdir(parents=True, exist_ok=True)
        for tracking in self.trackings:
            if tracking["id"] in self._dirty_ids:
                serializable_tracking = self.__convert_tracking_for_serialization(
                    deepcopy(tracking)
                )
                file_path = configuration.DATA_TRACKINGS_DIR / f"{tracking['id']}.yaml"
                file_path.write_text(dump(serializable_tracking, Dumper=Dumper))

        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._trackings is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_tracking_for_serialization(
        self, tracking: TrackingRecord
    ) -> dict[str, Any]:
        serializable_tracking = cast(dict[str, Any], tracking)
        serializable_tracking["date"] = time.date_to_str(serializable_tracking["date"])
        serializable_tracking["created"] = time.datetime_to_iso_str(
            serializable_tracking["created"]
        )
        serializable_tracking["updated"] = time.datetime_to_iso_str(
            serializable_tracking["updated"]
        )
        return serializable_tracking

    def __convert_tracking_for_deserialization(
        self, tracking: dict[str, Any]
    ) -> TrackingRecord:
        deserializable_tracking = tracking
        deserializable_tracking["date"] = time.date_from_str(
            str(deserializable_tracking["date"])
        )
        deserializable_tracking["created"] = time.datetime_from_str(
            deserializable_tracking["created"]
        )
        deserializable_tracking["updated"] = time.datetime_from_str(
            deserializable_tracking["updated"]
        )
        return cast(TrackingRecord, deserializable_tracking)

    def save_new_tracking(self, tracking: TrackingRecord) -> EntityId:
        if self.find_trackings(tracking["task_id"], tracking["date"]):
            raise TrackingConflictError(
                f"Task tracking already exists for {time.date_to_str(tracking['date'])}"
            )

        self.is_dirty = True

        tracking["id"] = generate_entity_id()
        self.trackings.append(tracking)
        self._dirty_ids.add(tracking["id"])

        return tracking["id"]

    def modify_tracking(
        self,
        id: EntityId,
        date: Optional[pendulum.Date],
        value: Optional[float],
        unit: Optional[str],
    ) -> None:
        tracking = self.__find_tracking(id)
        if date is not None and any(
            other["id"] != id for other in self.find_trackings(tracking["task_id"], date)
        ):
            raise TrackingConflictError(
                f"Task tracking already exists for {time.date_to_str(date)}"
            )

        self.is_dirty = True
        self._dirty_ids.add(id)

        tracking["updated"] = time.now_utc()
        if date is not None:
            tracking["date"] = date
        if value is not None:
            tracking["value"] = value
        if unit is not None:
            tracking["unit"] = unit

    def get_tracking(self, id: EntityId) -> TrackingRecord:
        return deepcopy(self.__find_tracking(id))

    def find_trackings(
        self, task_id: EntityId, date: pendulum.Date
    ) -> list[TrackingRecord]:
        return deepcopy(
            [
                tracking
                for tracking in self.trackings
                if tracking["task_id"] == task_id and tracking["date"] == date
            ]
        )

    def __find_tracking(self, id: EntityId) -> TrackingRecord:
        for tracking in self.trackings:
            if tracking["id"] == id:
                return tracking
        raise TrackingNotFoundError("Task tracking record not found")


TRACKING_REPO = TrackingRepository()
