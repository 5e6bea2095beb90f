from unittest.mock import MagicMock

import pytest

from backend.engine.fetch import AttendanceStoreClient, StoreError
from backend.engine.records import CourseAttendanceRecord
from backend.engine.session import AttendanceSession


@pytest.fixture
def store():
    """Record store double that returns two courses and accepts saves."""
    client = MagicMock(spec=AttendanceStoreClient)
    client.load_records.return_value = [
        CourseAttendanceRecord("Compiler Design", 20, 2),
        CourseAttendanceRecord("Operating Systems", 10, 4),
    ]
    client.save_records.return_value = {"ok": True}
    return client


@pytest.fixture
def failing_store():
    client = MagicMock(spec=AttendanceStoreClient)
    client.load_records.side_effect = StoreError("connection refused")
    client.save_records.side_effect = StoreError("503 Service Unavailable")
    return client


@pytest.fixture
def session(store):
    tracker = AttendanceSession(store)
    tracker.load()
    return tracker
