"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    BookingStoreError,
    InvalidDurationError,
    SalonSlotsError,
    ScheduleDataError,
    ServiceNotFoundError,
)
from .models import Appointment, BookedInterval, DaySchedule, Service
from .slot_generator import SlotGenerator, generate_slots

__all__ = [
    "Appointment",
    "BookedInterval",
    "BookingStoreError",
    "DaySchedule",
    "InvalidDurationError",
    "SalonSlotsError",
    "ScheduleDataError",
    "Service",
    "ServiceNotFoundError",
    "SlotGenerator",
    "generate_slots",
]
