"""
Tests for the JSON file booking store.
"""

import asyncio
import json
from datetime import date
from pathlib import Path

import pytest

from salonslots.adapters.json_store import SAMPLE_DATA_FILE, JsonBookingStore
from salonslots.domain.exceptions import BookingStoreError
from salonslots.services.availability import AvailabilityService


def _write(tmp_path, data) -> Path:
    path = tmp_path / "booking.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestJsonBookingStore:
    """Tests for loading and querying the JSON store."""

    def test_sample_data_loads(self):
        store = JsonBookingStore(SAMPLE_DATA_FILE)

        services = asyncio.run(store.get_active_services())
        schedules = asyncio.run(store.get_schedules())

        assert len(services) == 6
        assert all(s.is_active for s in services)
        assert [s.day_of_week for s in schedules] == [1, 2, 3, 4, 5, 6]

    def test_sql_times_are_normalized(self):
        store = JsonBookingStore(SAMPLE_DATA_FILE)

        monday = asyncio.run(store.get_schedule_by_day(1))

        assert monday.start_time == "10:00"
        assert monday.lunch_end == "14:00"

    def test_inactive_schedule_is_not_returned_for_day(self):
        store = JsonBookingStore(SAMPLE_DATA_FILE)

        assert asyncio.run(store.get_schedule_by_day(6)) is None
        assert asyncio.run(store.get_schedule_by_day(0)) is None

    def test_appointments_by_date(self):
        store = JsonBookingStore(SAMPLE_DATA_FILE)

        appointments = asyncio.run(store.get_appointments_by_date(date(2026, 10, 19)))

        assert {a.id for a in appointments} == {"apt-1", "apt-2"}

    def test_missing_file_gives_empty_store(self, tmp_path):
        store = JsonBookingStore(tmp_path / "missing.json")

        assert asyncio.run(store.get_active_services()) == []
        assert asyncio.run(store.get_schedule_by_day(1)) is None

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(BookingStoreError, match="Cannot read"):
            JsonBookingStore(path)

    def test_non_mapping_root_raises(self, tmp_path):
        with pytest.raises(BookingStoreError, match="mapping"):
            JsonBookingStore(_write(tmp_path, []))

    def test_invalid_schedule_raises(self, tmp_path):
        data = {
            "schedules": [
                {"dayOfWeek": 1, "startTime": "18:00", "endTime": "10:00"}
            ]
        }

        with pytest.raises(BookingStoreError, match="Invalid booking data"):
            JsonBookingStore(_write(tmp_path, data))

    def test_snake_case_keys_accepted(self, tmp_path):
        data = {
            "services": [
                {"id": "s1", "name": "Ботокс", "duration": 30, "price": 8000, "is_active": True}
            ],
            "schedules": [
                {"day_of_week": 2, "start_time": "09:00", "end_time": "12:00"}
            ],
        }

        store = JsonBookingStore(_write(tmp_path, data))

        assert asyncio.run(store.get_schedule_by_day(2)).work_start == 540
        assert asyncio.run(store.get_active_services())[0].id == "s1"


def test_sample_monday_availability():
    """The cancelled 15:00 booking on the sample Monday leaves its time open."""
    service = AvailabilityService(store=JsonBookingStore(SAMPLE_DATA_FILE))

    slots = asyncio.run(service.find_slots(day=date(2026, 10, 19), service_id="botox"))

    assert slots == [
        "10:00", "12:30", "14:00", "14:30", "15:00",
        "15:30", "16:00", "16:30", "17:00", "17:30",
    ]
