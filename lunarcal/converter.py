"""Conversion between Gregorian days and lunar dates.

Both directions are anchored at Gregorian 1900-01-31, the first day of lunar
year 1900. Days are exchanged as epoch days: whole days since 1970-01-01 UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Tuple

from .errors import InvalidDateError, LunarRangeError
from .tables import (
    FIRST_YEAR,
    LAST_YEAR,
    leap_month_length,
    leap_month_of,
    month_length,
    year_length,
)

__all__ = [
    "LUNAR_EPOCH_DAY",
    "LunarDate",
    "SolarDate",
    "epoch_day_of",
    "epoch_day_of_millis",
    "lunar_month_days",
    "lunar_to_solar",
    "solar_of_epoch_day",
    "solar_to_lunar",
    "validate_solar",
]

MILLIS_PER_DAY = 86_400_000

_UNIX_EPOCH = date(1970, 1, 1)


@dataclass(frozen=True)
class SolarDate:
    """A proleptic Gregorian calendar day."""

    year: int
    month: int
    day: int

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return self.to_date().isoformat()


@dataclass(frozen=True)
class LunarDate:
    """A day of the Chinese lunar calendar."""

    year: int
    month: int
    day: int
    is_leap_month: bool = False


def validate_solar(year: int, month: int, day: int) -> SolarDate:
    """Return a :class:`SolarDate`, rejecting impossible Gregorian dates."""

    try:
        date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid Gregorian date {year}-{month}-{day}: {exc}") from exc
    return SolarDate(year, month, day)


def epoch_day_of(solar: SolarDate) -> int:
    return (solar.to_date() - _UNIX_EPOCH).days


def solar_of_epoch_day(epoch_day: int) -> SolarDate:
    day = _UNIX_EPOCH + timedelta(days=epoch_day)
    return SolarDate(day.year, day.month, day.day)


def epoch_day_of_millis(millis: int) -> int:
    """Epoch day containing the UTC instant *millis* (floored for pre-1970)."""

    return millis // MILLIS_PER_DAY


LUNAR_EPOCH_DAY = epoch_day_of(SolarDate(1900, 1, 31))


def _month_steps(year: int) -> Iterator[Tuple[int, bool, int]]:
    """Yield ``(month, is_leap, length)`` for each month of *year* in order.

    The leap month directly follows the regular month with the same number.
    """

    leap = leap_month_of(year)
    for month in range(1, 13):
        yield month, False, month_length(year, month)
        if month == leap:
            yield month, True, leap_month_length(year)


def solar_to_lunar(epoch_day: int) -> LunarDate:
    """Resolve *epoch_day* to the lunar date it falls on.

    Raises
    ------
    LunarRangeError
        If the day precedes lunar 1900-01-01 or follows the end of lunar 2099.
    """

    offset = epoch_day - LUNAR_EPOCH_DAY
    if offset < 0:
        raise LunarRangeError(
            f"Epoch day {epoch_day} precedes lunar year {FIRST_YEAR}"
        )

    year = FIRST_YEAR
    days_in_year = year_length(year)
    while offset >= days_in_year:
        offset -= days_in_year
        year += 1
        if year > LAST_YEAR:
            raise LunarRangeError(
                f"Epoch day {epoch_day} follows lunar year {LAST_YEAR}"
            )
        days_in_year = year_length(year)

    for month, is_leap, length in _month_steps(year):
        if offset < length:
            return LunarDate(year, month, offset + 1, is_leap)
        offset -= length

    # Unreachable while year_length agrees with the month walk.
    raise LunarRangeError(f"Epoch day {epoch_day} overflows lunar year {year}")


def lunar_month_days(lunar: LunarDate) -> int:
    """Length of the month *lunar* falls in, leap months included."""

    if lunar.is_leap_month:
        if leap_month_of(lunar.year) != lunar.month:
            raise InvalidDateError(
                f"Lunar year {lunar.year} has no leap month {lunar.month}"
            )
        return leap_month_length(lunar.year)
    return month_length(lunar.year, lunar.month)


def lunar_to_solar(lunar: LunarDate) -> int:
    """Return the epoch day of a lunar date.

    Raises
    ------
    LunarRangeError
        If the lunar year is outside 1900-2099.
    InvalidDateError
        If the month, day or leap flag does not exist in that year.
    """

    if not FIRST_YEAR <= lunar.year <= LAST_YEAR:
        raise LunarRangeError(
            f"Lunar year {lunar.year} outside supported range {FIRST_YEAR}-{LAST_YEAR}"
        )
    if not 1 <= lunar.month <= 12:
        raise InvalidDateError(f"Lunar month must be within 1-12, got {lunar.month}")
    days_in_month = lunar_month_days(lunar)
    if not 1 <= lunar.day <= days_in_month:
        raise InvalidDateError(
            f"Lunar day {lunar.day} outside 1-{days_in_month} for "
            f"{lunar.year}-{'leap ' if lunar.is_leap_month else ''}{lunar.month}"
        )

    offset = lunar.day - 1
    for month in range(1, lunar.month):
        offset += month_length(lunar.year, month)

    leap = leap_month_of(lunar.year)
    if leap is not None and leap < lunar.month:
        offset += leap_month_length(lunar.year)
    if lunar.is_leap_month:
        offset += month_length(lunar.year, lunar.month)

    for year in range(FIRST_YEAR, lunar.year):
        offset += year_length(year)

    return offset + LUNAR_EPOCH_DAY
