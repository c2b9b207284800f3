"""
Tests for the booking API client.
"""

import asyncio
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from salonslots.adapters.http_client import HttpBookingClient
from salonslots.domain.exceptions import BookingStoreError

MONDAY = date(2026, 10, 19)


def _response(payload, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def client():
    return HttpBookingClient(base_url="https://booking.example.com/", timeout=5, api_token="secret")


class TestHttpBookingClient:
    """Tests for HttpBookingClient."""

    def test_fetch_schedules(self, client):
        payload = [
            {"id": "mon", "dayOfWeek": 1, "startTime": "10:00:00", "endTime": "18:00:00",
             "lunchStart": "13:00:00", "lunchEnd": "14:00:00", "isActive": True,
             "createdAt": "2026-01-01T00:00:00Z"},
        ]

        with patch("salonslots.adapters.http_client.requests.get", return_value=_response(payload)) as get:
            schedules = client.fetch_schedules()

        assert len(schedules) == 1
        assert schedules[0].lunch == (780, 840)
        get.assert_called_once_with(
            "https://booking.example.com/api/schedules",
            headers={"Accept": "application/json", "Authorization": "Bearer secret"},
            params=None,
            timeout=5,
        )

    def test_malformed_rows_are_skipped(self, client):
        payload = [
            {"id": "ok", "name": "Ботокс", "duration": 30, "price": 8000},
            {"id": "broken", "name": "Без длительности"},
            {"id": "zero", "name": "Пустая", "duration": 0, "price": 0},
        ]

        with patch("salonslots.adapters.http_client.requests.get", return_value=_response(payload)):
            services = client.fetch_services()

        assert [s.id for s in services] == ["ok"]

    def test_appointments_are_requested_by_date(self, client):
        payload = [
            {"id": "a1", "serviceId": "botox", "appointmentDate": "2026-10-19T00:00:00.000Z",
             "startTime": "11:00:00", "endTime": "11:30:00", "status": "scheduled",
             "email": "client@example.com", "manageToken": "abc"},
            {"id": "a2", "serviceId": "botox", "appointmentDate": "2026-10-20T00:00:00.000Z",
             "startTime": "11:00:00", "endTime": "11:30:00", "status": "scheduled"},
        ]

        with patch("salonslots.adapters.http_client.requests.get", return_value=_response(payload)) as get:
            appointments = asyncio.run(client.get_appointments_by_date(MONDAY))

        assert [a.id for a in appointments] == ["a1"]
        assert get.call_args.kwargs["params"] == {"date": "2026-10-19"}

    def test_http_error_raises_store_error(self, client):
        with patch("salonslots.adapters.http_client.requests.get", return_value=_response({}, 500)):
            with pytest.raises(BookingStoreError, match="/api/services"):
                client.fetch_services()

    def test_connection_error_raises_store_error(self, client):
        with patch(
            "salonslots.adapters.http_client.requests.get",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(BookingStoreError, match="refused"):
                asyncio.run(client.get_active_services())

    def test_non_list_payload_raises(self, client):
        with patch("salonslots.adapters.http_client.requests.get", return_value=_response({"message": "Unauthorized"})):
            with pytest.raises(BookingStoreError, match="Expected a list"):
                client.fetch_schedules()

    def test_schedule_by_day_skips_inactive(self, client):
        payload = [
            {"dayOfWeek": 6, "startTime": "11:00", "endTime": "15:00", "isActive": False},
            {"dayOfWeek": 1, "startTime": "10:00", "endTime": "18:00", "isActive": None},
        ]

        with patch("salonslots.adapters.http_client.requests.get", return_value=_response(payload)):
            assert asyncio.run(client.get_schedule_by_day(6)) is None
            assert asyncio.run(client.get_schedule_by_day(1)).is_active

