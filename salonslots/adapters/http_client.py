"""
Booking REST API client for fetching schedules, services and appointments.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Type

import requests
from pydantic import ValidationError

from ..domain.exceptions import BookingStoreError, SalonSlotsError
from ..domain.models import Appointment, DaySchedule, Service
from .records import AppointmentRecord, ScheduleRecord, ServiceRecord, WireRecord

logger = logging.getLogger(__name__)


class HttpBookingClient:
    """
    Client for the salon booking API.

    Endpoints used:
        GET /api/schedules
        GET /api/services
        GET /api/appointments?date=YYYY-MM-DD
    """

    def __init__(self, base_url: str, timeout: float = 30, api_token: Optional[str] = None):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the booking backend
            timeout: Request timeout in seconds
            api_token: Optional bearer token for endpoints that need a session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        if api_token:
            self.headers["Authorization"] = f"Bearer {api_token}"

    def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        Perform a GET request and decode the JSON body.

        Raises:
            BookingStoreError: If the request fails or the body is not JSON
        """
        url = f"{self.base_url}{path}"

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            raise BookingStoreError(f"Failed to fetch {path} from booking API: {e}") from e
        except ValueError as e:
            raise BookingStoreError(f"Booking API returned invalid JSON for {path}: {e}") from e

    def _parse_records(self, payload: Any, record_type: Type[WireRecord]) -> list:
        """Convert a list payload to domain objects, skipping malformed rows."""
        if not isinstance(payload, list):
            raise BookingStoreError(
                f"Expected a list of {record_type.__name__} items, got {type(payload).__name__}"
            )

        items = []
        for raw in payload:
            try:
                items.append(record_type.model_validate(raw).to_domain())
            except (ValidationError, SalonSlotsError) as e:
                logger.warning("Skipping malformed %s: %s", record_type.__name__, e)
        return items

    def fetch_schedules(self) -> List[DaySchedule]:
        return self._parse_records(self._get_json("/api/schedules"), ScheduleRecord)

    def fetch_services(self) -> List[Service]:
        return self._parse_records(self._get_json("/api/services"), ServiceRecord)

    def fetch_appointments(self, day: date) -> List[Appointment]:
        payload = self._get_json("/api/appointments", params={"date": day.isoformat()})
        appointments = self._parse_records(payload, AppointmentRecord)
        return [a for a in appointments if a.appointment_date == day]

    async def get_schedule_by_day(self, day_of_week: int) -> Optional[DaySchedule]:
        for schedule in await asyncio.to_thread(self.fetch_schedules):
            if schedule.day_of_week == day_of_week and schedule.is_active:
                return schedule
        return None

    async def get_schedules(self) -> List[DaySchedule]:
        schedules = await asyncio.to_thread(self.fetch_schedules)
        return sorted(schedules, key=lambda s: s.day_of_week)

    async def get_appointments_by_date(self, day: date) -> List[Appointment]:
        return await asyncio.to_thread(self.fetch_appointments, day)

    async def get_active_services(self) -> List[Service]:
        services = await asyncio.to_thread(self.fetch_services)
        return [s for s in services if s.is_active]
