from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from backend.engine.attendance import (
    DEFAULT_THRESHOLD,
    AttendanceProjection,
    compute_projection,
)
from backend.engine.fetch import AttendanceStoreClient, StoreError
from backend.engine.records import (
    DEFAULT_RECORDS,
    CourseAttendanceRecord,
    RecordNotFoundError,
    adjust_field,
    build_records,
    set_field,
)
from backend.engine.stream import app_logger

SAVE_SUCCESS_MESSAGE = "Attendance saved"
SAVE_FAILURE_MESSAGE = "Error saving attendance"


@dataclass(frozen=True)
class Notification:
    success: bool
    message: str


class AttendanceSession:
    """In-memory attendance records for one user, backed by a record store."""

    def __init__(
        self,
        store: AttendanceStoreClient,
        defaults: Sequence[Tuple[str, int, int]] = DEFAULT_RECORDS,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self.store = store
        self.defaults = tuple(defaults)
        self.threshold = threshold
        self.records: List[CourseAttendanceRecord] = []
        self.loaded = False

    def load(self) -> List[CourseAttendanceRecord]:
        try:
            records = self.store.load_records()
        except StoreError as e:
            app_logger.warning(f"Failed to load attendance records, using defaults: {e}")
            records = []
        else:
            if not records:
                app_logger.info("Record store returned no subjects, using defaults")

        self.records = records or build_records(self.defaults)
        self.loaded = True
        return self.records

    def projection(self, index: int) -> AttendanceProjection:
        record = self._get(index)
        return compute_projection(record.conducted, record.absent, self.threshold)

    def projections(self) -> List[AttendanceProjection]:
        return [
            compute_projection(record.conducted, record.absent, self.threshold)
            for record in self.records
        ]

    def entries(self) -> List[Tuple[CourseAttendanceRecord, AttendanceProjection]]:
        return list(zip(self.records, self.projections()))

    def set_field(self, index: int, field: str, value: Any) -> CourseAttendanceRecord:
        record = self._get(index)
        set_field(record, field, value)
        return record

    def adjust_field(self, index: int, field: str, delta: int) -> CourseAttendanceRecord:
        record = self._get(index)
        adjust_field(record, field, delta)
        return record

    def save(self) -> Notification:
        try:
            self.store.save_records(self.records)
        except StoreError as e:
            app_logger.error(f"Saving attendance failed: {e}")
            return Notification(success=False, message=SAVE_FAILURE_MESSAGE)

        app_logger.info("Attendance saved to record store")
        return Notification(success=True, message=SAVE_SUCCESS_MESSAGE)

    def _get(self, index: int) -> CourseAttendanceRecord:
        if not 0 <= index < len(self.records):
            raise RecordNotFoundError(f"No attendance record at index {index}")
        return self.records[index]
