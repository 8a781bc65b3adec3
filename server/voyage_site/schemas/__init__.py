"""Pydantic schemas for request/response validation."""

from .booking import *  # noqa: F403
from .health import *  # noqa: F403
from .performance import *  # noqa: F403
from .search import *  # noqa: F403
