from typing import Any, Dict, List, Optional, Sequence

import requests

from backend.engine.stream import app_logger
from backend.engine.records import CourseAttendanceRecord, RecordEditError


class StoreError(Exception):
    """Raised when the attendance record store cannot be read or written."""

    pass


class AttendanceStoreClient:
    """HTTP client for the external store holding the attendance records."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.attendance_endpoint = f"{self.base_url}/attendance"
        self.session = session or requests.Session()

    def load_records(self) -> List[CourseAttendanceRecord]:
        app_logger.info(f"Fetching attendance records from {self.attendance_endpoint}")

        try:
            response = self.session.get(self.attendance_endpoint)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise StoreError(f"Failed to fetch attendance records: {e}")
        except ValueError as e:
            raise StoreError(f"Invalid JSON in attendance response: {e}")

        return self._parse_subjects(payload)

    def save_records(self, records: Sequence[CourseAttendanceRecord]) -> Dict[str, Any]:
        body = {"subjects": [record.to_payload() for record in records]}
        app_logger.info(f"Saving {len(records)} attendance records")

        try:
            response = self.session.post(self.attendance_endpoint, json=body)
            response.raise_for_status()
        except requests.RequestException as e:
            raise StoreError(f"Failed to save attendance records: {e}")

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON in save response: {e}")

    def _parse_subjects(self, payload: Any) -> List[CourseAttendanceRecord]:
        if not isinstance(payload, dict):
            raise StoreError("Attendance response is not a JSON object")

        subjects = payload.get("subjects") or []
        if not isinstance(subjects, list):
            raise StoreError("Attendance response 'subjects' is not a list")

        records: List[CourseAttendanceRecord] = []
        for item in subjects:
            try:
                records.append(CourseAttendanceRecord.from_payload(item))
            except (KeyError, TypeError, RecordEditError) as e:
                raise StoreError(f"Malformed attendance record {item!r}: {e}")

        return records
