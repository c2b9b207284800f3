"""
Adapters layer - Booking data sources (JSON file, booking REST API).
"""

from .http_client import HttpBookingClient
from .json_store import SAMPLE_DATA_FILE, JsonBookingStore

__all__ = ["HttpBookingClient", "JsonBookingStore", "SAMPLE_DATA_FILE"]
