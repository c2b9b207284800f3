"""
Application service answering "which start times can I book?".

The service reads the day's schedule, appointments and the requested
service from a booking store and delegates the actual slot generation to
the domain-level ``SlotGenerator``. The store is described by a protocol
so the JSON file store, the HTTP client or a test stub can be plugged in.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Protocol, Tuple

from ..domain.exceptions import ServiceNotFoundError
from ..domain.models import (
    Appointment,
    BookedInterval,
    DaySchedule,
    Service,
    minutes_to_time,
    time_to_minutes,
    weekday_index,
)
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class BookingStoreProtocol(Protocol):
    """Protocol describing the booking data the service needs."""

    async def get_schedule_by_day(self, day_of_week: int) -> Optional[DaySchedule]:
        """Return the active schedule for a weekday (0=Sunday), if any."""

    async def get_schedules(self) -> List[DaySchedule]:
        """Return all weekly schedules."""

    async def get_appointments_by_date(self, day: date) -> List[Appointment]:
        """Return every appointment on the given calendar day."""

    async def get_active_services(self) -> List[Service]:
        """Return the services currently offered."""


class AvailabilityService:
    """
    Orchestrates booking-store lookups and slot generation.
    """

    def __init__(
        self,
        store: BookingStoreProtocol,
        slot_generator: SlotGenerator | None = None,
    ) -> None:
        self._store = store
        self._slot_generator = slot_generator or SlotGenerator()

    async def find_slots(self, *, day: date, service_id: str) -> List[str]:
        """
        Compute bookable start times for a service on a calendar day.

        A day without an active schedule yields an empty list.

        Raises:
            ServiceNotFoundError: If the service is unknown or inactive
        """
        day_of_week = weekday_index(day)
        logger.debug("Availability requested for %s (weekday %d), service %s",
                     day.isoformat(), day_of_week, service_id)

        schedule = await self._store.get_schedule_by_day(day_of_week)
        if schedule is None or not schedule.is_active:
            logger.info("No active schedule for %s", day.isoformat())
            return []

        appointments = await self._store.get_appointments_by_date(day)
        service = await self.resolve_service(service_id)

        booked = self.booked_intervals_from(appointments)
        slots = self._slot_generator.generate(schedule, booked, service.duration)

        logger.info(
            "%d slot(s) for '%s' on %s (%d booked interval(s))",
            len(slots), service.name, day.isoformat(), len(booked),
        )
        return slots

    async def resolve_service(self, service_id: str) -> Service:
        """Look up an active service by id."""
        for service in await self._store.get_active_services():
            if service.id == service_id:
                return service
        raise ServiceNotFoundError(service_id)

    @staticmethod
    def booked_intervals_from(appointments: Iterable[Appointment]) -> List[BookedInterval]:
        """Keep only appointments that still occupy time and convert them."""
        return [
            appointment.to_interval()
            for appointment in appointments
            if appointment.is_blocking()
        ]

    @staticmethod
    def appointment_window(start: str, duration: int) -> Tuple[str, str]:
        """Return the ``(start, end)`` clock pair a booking at ``start`` occupies."""
        begin = time_to_minutes(start)
        return minutes_to_time(begin), minutes_to_time(begin + duration)
