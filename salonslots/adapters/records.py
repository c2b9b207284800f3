"""
Wire records of the booking API, parsed with pydantic.

Records arrive with camelCase keys (``startTime``, ``isActive``) and are
converted to domain objects via ``to_domain()``.
"""

from datetime import date
from typing import Optional

import pendulum
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..domain.models import (
    SCHEDULED,
    Appointment,
    DaySchedule,
    Service,
    minutes_to_time,
    time_to_minutes,
)


def _normalize_clock(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return minutes_to_time(time_to_minutes(value))


class WireRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ScheduleRecord(WireRecord):
    """Weekly schedule row."""
    id: Optional[str] = None
    day_of_week: int
    start_time: str
    end_time: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    is_active: bool = True

    @field_validator("start_time", "end_time", "lunch_start", "lunch_end", mode="before")
    @classmethod
    def normalize_clock(cls, value):
        """Accept ``HH:MM`` and ``HH:MM:SS``, store ``HH:MM``."""
        return _normalize_clock(value)

    @field_validator("is_active", mode="before")
    @classmethod
    def default_active(cls, value):
        # NULL in the database means the column default
        return True if value is None else value

    def to_domain(self) -> DaySchedule:
        return DaySchedule(
            start_time=self.start_time,
            end_time=self.end_time,
            lunch_start=self.lunch_start,
            lunch_end=self.lunch_end,
            is_active=self.is_active,
            day_of_week=self.day_of_week,
            id=self.id,
        )


class AppointmentRecord(WireRecord):
    """Appointment row; contact details and tokens are ignored."""
    id: str
    service_id: str
    appointment_date: date
    start_time: str
    end_time: str
    status: str = SCHEDULED
    notes: Optional[str] = None

    @field_validator("appointment_date", mode="before")
    @classmethod
    def parse_date(cls, value):
        """Take the calendar date of an ISO date or timestamp as given."""
        if isinstance(value, str):
            return pendulum.parse(value).date()
        return value

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def normalize_clock(cls, value):
        return _normalize_clock(value)

    def to_domain(self) -> Appointment:
        return Appointment(
            id=self.id,
            service_id=self.service_id,
            appointment_date=self.appointment_date,
            start_time=self.start_time,
            end_time=self.end_time,
            status=self.status,
            notes=self.notes,
        )


class ServiceRecord(WireRecord):
    """Service catalogue row."""
    id: str
    name: str
    duration: int
    price: int = 0
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("is_active", mode="before")
    @classmethod
    def default_active(cls, value):
        return True if value is None else value

    def to_domain(self) -> Service:
        return Service(
            id=self.id,
            name=self.name,
            duration=self.duration,
            price=self.price,
            description=self.description,
            is_active=self.is_active,
        )
