from unittest.mock import MagicMock

import pytest
import requests

from backend.engine.fetch import AttendanceStoreClient, StoreError
from backend.engine.records import CourseAttendanceRecord


def _response(payload=None, error=None):
    response = MagicMock()
    response.raise_for_status.side_effect = error
    response.json.return_value = payload
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return AttendanceStoreClient("http://store.local/api/", session=http)


class TestLoadRecords:
    def test_parses_subjects(self, client, http):
        http.get.return_value = _response(
            {"subjects": [{"courseCode": "Internet of Things", "conducted": 15, "absent": 3}]}
        )

        records = client.load_records()

        http.get.assert_called_once_with("http://store.local/api/attendance")
        assert records == [CourseAttendanceRecord("Internet of Things", 15, 3)]

    def test_missing_subjects_is_empty(self, client, http):
        http.get.return_value = _response({})
        assert client.load_records() == []

    def test_network_error(self, client, http):
        http.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(StoreError):
            client.load_records()

    def test_http_error_status(self, client, http):
        http.get.return_value = _response(error=requests.HTTPError("500 Server Error"))

        with pytest.raises(StoreError):
            client.load_records()

    def test_invalid_json(self, client, http):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        http.get.return_value = response

        with pytest.raises(StoreError):
            client.load_records()

    def test_negative_counts_are_clamped(self, client, http):
        http.get.return_value = _response(
            {"subjects": [{"courseCode": "Internet of Things", "conducted": -1, "absent": "-1"}]}
        )

        assert client.load_records() == [CourseAttendanceRecord("Internet of Things", 0, 0)]

    def test_malformed_record(self, client, http):
        http.get.return_value = _response({"subjects": [{"courseCode": "IoT", "conducted": "many"}]})

        with pytest.raises(StoreError):
            client.load_records()


class TestSaveRecords:
    def test_posts_wire_payload(self, client, http):
        http.post.return_value = _response({"ok": True})

        result = client.save_records([CourseAttendanceRecord("Behavioral Psychology", 15, 0)])

        assert result == {"ok": True}
        http.post.assert_called_once_with(
            "http://store.local/api/attendance",
            json={"subjects": [{"courseCode": "Behavioral Psychology", "conducted": 15, "absent": 0}]},
        )

    def test_http_error_status(self, client, http):
        http.post.return_value = _response(error=requests.HTTPError("503 Service Unavailable"))

        with pytest.raises(StoreError):
            client.save_records([])
