"""
Booking store backed by a JSON file.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..domain.exceptions import BookingStoreError, SalonSlotsError
from ..domain.models import Appointment, DaySchedule, Service
from .records import AppointmentRecord, ScheduleRecord, ServiceRecord

logger = logging.getLogger(__name__)

SAMPLE_DATA_FILE = Path(__file__).parent / "sample_booking_data.json"


class JsonBookingStore:
    """
    Store that reads services, schedules and appointments from a JSON file.

    Expected layout::

        {
            "services": [{"id": ..., "name": ..., "duration": 60, ...}],
            "schedules": [{"dayOfWeek": 1, "startTime": "10:00", ...}],
            "appointments": [{"id": ..., "appointmentDate": "2026-10-19", ...}]
        }
    """

    def __init__(self, data_file: Path = SAMPLE_DATA_FILE):
        """
        Initialize the store and load the data file.

        Args:
            data_file: Path to the JSON data file

        Raises:
            BookingStoreError: If the file exists but cannot be parsed
        """
        self.data_file = Path(data_file)
        self.services: List[Service] = []
        self.schedules: List[DaySchedule] = []
        self.appointments: List[Appointment] = []
        self._load_booking_data()

    def _load_booking_data(self):
        """Load and validate all records from the data file."""
        if not self.data_file.exists():
            logger.warning("Booking data file %s not found, starting empty", self.data_file)
            return

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingStoreError(f"Cannot read booking data from {self.data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise BookingStoreError("Booking data file must contain a mapping at the root level.")

        try:
            self.services = [
                ServiceRecord.model_validate(item).to_domain()
                for item in data.get("services", [])
            ]
            self.schedules = [
                ScheduleRecord.model_validate(item).to_domain()
                for item in data.get("schedules", [])
            ]
            self.appointments = [
                AppointmentRecord.model_validate(item).to_domain()
                for item in data.get("appointments", [])
            ]
        except (ValidationError, SalonSlotsError) as exc:
            raise BookingStoreError(f"Invalid booking data in {self.data_file}: {exc}") from exc

        logger.debug(
            "Loaded %d service(s), %d schedule(s), %d appointment(s) from %s",
            len(self.services), len(self.schedules), len(self.appointments), self.data_file,
        )

    async def get_schedule_by_day(self, day_of_week: int) -> Optional[DaySchedule]:
        for schedule in self.schedules:
            if schedule.day_of_week == day_of_week and schedule.is_active:
                return schedule
        return None

    async def get_schedules(self) -> List[DaySchedule]:
        return sorted(self.schedules, key=lambda s: s.day_of_week)

    async def get_appointments_by_date(self, day: date) -> List[Appointment]:
        return [a for a in self.appointments if a.appointment_date == day]

    async def get_active_services(self) -> List[Service]:
        return sorted(
            (s for s in self.services if s.is_active),
            key=lambda s: s.name,
        )
