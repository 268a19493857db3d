"""Approximate dates of the 24 solar terms.

The model is linear: a fixed reference instant plus a constant tropical year
plus a per-term minute offset. It is only meaningful for 1900-2100, and the
sexagenary month and year boundaries are calibrated against it, so it must
not be swapped for an ephemeris-based solution.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Tuple

from .converter import SolarDate
from .errors import LunarRangeError
from .tables import SOLAR_TERMS, solar_term_name, solar_term_offset_minutes

__all__ = [
    "REFERENCE_INSTANT",
    "TROPICAL_YEAR_MS",
    "solar_term_date",
    "solar_term_instant",
    "solar_terms_of_year",
]

REFERENCE_INSTANT = datetime(1900, 1, 6, 2, 5, 0, tzinfo=timezone.utc)

# 365.24219878 days expressed in milliseconds, truncated to a whole number.
TROPICAL_YEAR_MS = 31556925974

FIRST_TERM_YEAR = 1900
LAST_TERM_YEAR = 2100


def solar_term_instant(year: int, index: int) -> datetime:
    """Return the approximate UTC instant of solar term *index* in *year*.

    Parameters
    ----------
    year:
        Gregorian year in 1900-2100.
    index:
        Term index in [0, 24), 0 being 小寒 in early January.

    Raises
    ------
    LunarRangeError
        If *year* lies outside the range the model was fitted for.
    IndexError
        If *index* is not a valid term index.
    """

    if not FIRST_TERM_YEAR <= year <= LAST_TERM_YEAR:
        raise LunarRangeError(
            f"Solar terms are only modelled for {FIRST_TERM_YEAR}-{LAST_TERM_YEAR}, got {year}"
        )
    offset_ms = TROPICAL_YEAR_MS * (year - FIRST_TERM_YEAR)
    offset_ms += solar_term_offset_minutes(index) * 60_000
    return REFERENCE_INSTANT + timedelta(milliseconds=offset_ms)


def solar_term_date(year: int, index: int) -> Tuple[int, int]:
    """Return the UTC ``(month, day)`` on which term *index* falls in *year*."""

    instant = solar_term_instant(year, index)
    return instant.month, instant.day


def solar_terms_of_year(year: int) -> List[Tuple[str, SolarDate]]:
    """List every solar term of *year* with its date, in calendar order."""

    terms: List[Tuple[str, SolarDate]] = []
    for index in range(len(SOLAR_TERMS)):
        month, day = solar_term_date(year, index)
        terms.append((solar_term_name(index), SolarDate(year, month, day)))
    return terms
