"""
Core business logic for generating bookable appointment start times.

Pure domain logic: no storage, no network, no clock reads.
"""

from typing import Iterable, List

from .exceptions import InvalidDurationError
from .models import BookedInterval, DaySchedule, minutes_to_time

DEFAULT_STEP_MINUTES = 30


class SlotGenerator:
    """
    Generates bookable start times for one working day.

    Algorithm:
    1. Sort booked intervals by start time
    2. Walk a cursor from opening time; before each booking, offer the
       cursor once if the service fits in front of the booking
    3. Move the cursor past the booking (never backwards)
    4. After the last booking, offer every ``step_minutes`` until closing
    5. Every offered slot must stay clear of the lunch break

    Only the earliest start in a gap before a booking is offered, while
    the time after the last booking is offered on the fixed step grid.
    """

    def __init__(self, step_minutes: int = DEFAULT_STEP_MINUTES):
        if step_minutes <= 0:
            raise ValueError(f"step_minutes must be greater than zero, got {step_minutes}")
        self.step_minutes = step_minutes

    def generate(
        self,
        schedule: DaySchedule,
        booked_intervals: Iterable[BookedInterval],
        duration: int
    ) -> List[str]:
        """
        Generate the ordered list of ``HH:MM`` start times.

        Args:
            schedule: Active working schedule for the day
            booked_intervals: Occupied intervals, in any order, possibly overlapping
            duration: Service duration in minutes

        Returns:
            Start times in ascending order

        Raises:
            InvalidDurationError: If duration is not positive
        """
        if duration <= 0:
            raise InvalidDurationError(f"Duration must be greater than zero, got {duration}")

        work_end = schedule.work_end
        slots: List[str] = []
        current = schedule.work_start

        for interval in sorted(booked_intervals, key=lambda i: i.start):
            if self._fits(schedule, current, duration, interval.start):
                slots.append(minutes_to_time(current))

            current = max(current, interval.end)

        while current + duration <= work_end:
            if not schedule.overlaps_lunch(current, duration):
                slots.append(minutes_to_time(current))
            current += self.step_minutes

        return slots

    @staticmethod
    def _fits(schedule: DaySchedule, start: int, duration: int, limit: int) -> bool:
        # a booking may sit past closing time; the slot itself may not
        end = start + duration
        return (
            end <= limit
            and end <= schedule.work_end
            and not schedule.overlaps_lunch(start, duration)
        )


def generate_slots(
    schedule: DaySchedule,
    booked_intervals: Iterable[BookedInterval],
    duration: int
) -> List[str]:
    """Generate start times with the default 30-minute step."""
    return SlotGenerator().generate(schedule, booked_intervals, duration)
