"""Voyage site data service: booking availability, search content, and performance metrics."""

__version__ = "1.0.0"
