"""HTTP clients for the service endpoints."""

from .dates_client import BookingDatesClient

__all__ = ["BookingDatesClient"]
