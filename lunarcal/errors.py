"""Exceptions raised while resolving calendar dates."""

from __future__ import annotations

__all__ = [
    "CalendarError",
    "InvalidDateError",
    "LunarRangeError",
    "TableIntegrityError",
]


class CalendarError(ValueError):
    """Base class for rejected calendar input."""


class LunarRangeError(CalendarError):
    """Raised when a year falls outside the 1900-2099 lunar table."""


class InvalidDateError(CalendarError):
    """Raised for an impossible lunar or Gregorian date."""


class TableIntegrityError(RuntimeError):
    """Raised when the packed year table holds an undefined leap nibble."""
