"""
Domain models for working schedules, appointments and booked time.

All clock values are naive local times of day with minute precision.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .exceptions import InvalidDurationError, ScheduleDataError

SCHEDULED = "scheduled"
CANCELLED = "cancelled"
COMPLETED = "completed"

# 0=Sunday, 6=Saturday
WEEKDAY_NAMES = {
    0: "Воскресенье",
    1: "Понедельник",
    2: "Вторник",
    3: "Среда",
    4: "Четверг",
    5: "Пятница",
    6: "Суббота",
}


def time_to_minutes(value: str) -> int:
    """
    Convert an ``HH:MM`` clock string to minutes since midnight.

    Trailing components (``HH:MM:SS`` from SQL time columns) are ignored.

    Raises:
        ScheduleDataError: If the value is not a valid clock string
    """
    parts = str(value).split(":")
    if len(parts) < 2:
        raise ScheduleDataError(f"Invalid clock value: '{value}'")

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError as exc:
        raise ScheduleDataError(f"Invalid clock value: '{value}'") from exc

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ScheduleDataError(f"Clock value out of range: '{value}'")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to a zero-padded ``HH:MM`` string."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def weekday_index(day: date) -> int:
    """Return the weekday of ``day`` with 0=Sunday, matching stored schedules."""
    return day.isoweekday() % 7


@dataclass(frozen=True)
class DaySchedule:
    """
    Working hours of the salon for one day of the week.

    Invariant: start before end; lunch, if present, lies inside the
    working window and both of its bounds are given.
    """
    start_time: str
    end_time: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    is_active: bool = True
    day_of_week: Optional[int] = None
    id: Optional[str] = None

    def __post_init__(self):
        work_start = time_to_minutes(self.start_time)
        work_end = time_to_minutes(self.end_time)

        if work_start >= work_end:
            raise ScheduleDataError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )

        if (self.lunch_start is None) != (self.lunch_end is None):
            raise ScheduleDataError("lunch_start and lunch_end must be given together")

        if self.lunch_start is not None:
            lunch_start = time_to_minutes(self.lunch_start)
            lunch_end = time_to_minutes(self.lunch_end)
            if not (work_start <= lunch_start < lunch_end <= work_end):
                raise ScheduleDataError(
                    f"Lunch {self.lunch_start}-{self.lunch_end} must lie within "
                    f"{self.start_time}-{self.end_time}"
                )

        if self.day_of_week is not None and self.day_of_week not in range(7):
            raise ScheduleDataError(
                f"day_of_week must be between 0 and 6, got {self.day_of_week}"
            )

    @property
    def work_start(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def work_end(self) -> int:
        return time_to_minutes(self.end_time)

    @property
    def lunch(self) -> Optional[Tuple[int, int]]:
        """Lunch interval in minutes, or None if there is no lunch break."""
        if self.lunch_start is None:
            return None
        return time_to_minutes(self.lunch_start), time_to_minutes(self.lunch_end)

    def overlaps_lunch(self, start: int, duration: int) -> bool:
        """Check if ``[start, start + duration)`` touches the lunch break at all."""
        lunch = self.lunch
        if lunch is None:
            return False
        lunch_start, lunch_end = lunch
        return not (start + duration <= lunch_start or start >= lunch_end)

    def format_hours(self) -> str:
        return f"{self.start_time} – {self.end_time}"

    def format_lunch(self) -> str:
        if self.lunch_start is None:
            return "—"
        return f"{self.lunch_start} – {self.lunch_end}"


@dataclass(frozen=True)
class BookedInterval:
    """Occupied time of one scheduled appointment, in minutes since midnight."""
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ScheduleDataError(
                f"Booked interval start {minutes_to_time(self.start)} must be "
                f"before end {minutes_to_time(self.end)}"
            )

    @classmethod
    def from_clock(cls, start_time: str, end_time: str) -> "BookedInterval":
        return cls(start=time_to_minutes(start_time), end=time_to_minutes(end_time))

    def overlaps(self, start: int, duration: int) -> bool:
        return start < self.end and start + duration > self.start

    def __str__(self) -> str:
        return f"{minutes_to_time(self.start)} - {minutes_to_time(self.end)}"


@dataclass
class Appointment:
    """An appointment record as kept by the booking store."""
    id: str
    service_id: str
    appointment_date: date
    start_time: str
    end_time: str
    status: str = SCHEDULED
    notes: Optional[str] = None

    def is_blocking(self) -> bool:
        """Only scheduled appointments occupy time; cancelled or completed ones do not."""
        return self.status == SCHEDULED

    def to_interval(self) -> BookedInterval:
        return BookedInterval.from_clock(self.start_time, self.end_time)


@dataclass
class Service:
    """A bookable salon service."""
    id: str
    name: str
    duration: int  # minutes
    price: int = 0
    description: Optional[str] = None
    is_active: bool = True

    def __post_init__(self):
        if self.duration <= 0:
            raise InvalidDurationError(
                f"Service '{self.name}' must have a positive duration, got {self.duration}"
            )
