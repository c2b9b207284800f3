"""
Domain-specific exception hierarchy for the salon slot application.
"""


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class ScheduleDataError(SalonSlotsError, ValueError):
    """Raised when clock values or schedule bounds are malformed."""


class InvalidDurationError(SalonSlotsError, ValueError):
    """Raised when a service duration is not a positive number of minutes."""


class ServiceNotFoundError(SalonSlotsError):
    """Raised when the requested service does not exist or is inactive."""

    def __init__(self, service_id: str):
        super().__init__(f"Service not found: '{service_id}'")
        self.service_id = service_id


class BookingStoreError(SalonSlotsError):
    """Raised when schedules, services or appointments cannot be loaded."""
