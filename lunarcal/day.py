"""Resolved calendar day: the query surface used by presentation code."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

from . import almanac
from .converter import (
    LunarDate,
    SolarDate,
    epoch_day_of,
    epoch_day_of_millis,
    lunar_month_days,
    lunar_to_solar,
    solar_of_epoch_day,
    solar_to_lunar,
    validate_solar,
)
from .cyclical import CyclicalIndices, cyclical_indices, cyclical_name, lunar_year_cyclical
from .errors import LunarRangeError
from .tables import FIRST_YEAR, LAST_YEAR

__all__ = ["LunarCalendarDay"]

# Lunar 2099 ends on 2100-02-08, so Gregorian 2100 is partly covered.
LAST_SOLAR_YEAR = LAST_YEAR + 1


@dataclass(frozen=True)
class LunarCalendarDay:
    """One day resolved in both calendars together with its cycle indices.

    Build instances through the ``from_*`` constructors; they validate the
    input, so every accessor afterwards is guaranteed to succeed.
    """

    epoch_day: int
    solar: SolarDate
    lunar: LunarDate
    cyclical: CyclicalIndices
    lunar_month_days: int

    # ---- constructors ----
    @classmethod
    def from_epoch_day(cls, epoch_day: int) -> "LunarCalendarDay":
        lunar = solar_to_lunar(epoch_day)
        solar = solar_of_epoch_day(epoch_day)
        return cls(
            epoch_day=epoch_day,
            solar=solar,
            lunar=lunar,
            cyclical=cyclical_indices(solar),
            lunar_month_days=lunar_month_days(lunar),
        )

    @classmethod
    def from_solar(cls, year: int, month: int, day: int) -> "LunarCalendarDay":
        if not FIRST_YEAR <= year <= LAST_SOLAR_YEAR:
            raise LunarRangeError(
                f"Gregorian year {year} outside supported range {FIRST_YEAR}-{LAST_YEAR}"
            )
        return cls.from_epoch_day(epoch_day_of(validate_solar(year, month, day)))

    @classmethod
    def from_date(cls, value: date) -> "LunarCalendarDay":
        return cls.from_solar(value.year, value.month, value.day)

    @classmethod
    def from_timestamp(cls, millis: int) -> "LunarCalendarDay":
        """Resolve the UTC day containing the epoch timestamp *millis*."""

        return cls.from_epoch_day(epoch_day_of_millis(millis))

    @classmethod
    def from_lunar(
        cls, year: int, month: int, day: int, is_leap_month: bool = False
    ) -> "LunarCalendarDay":
        return cls.from_epoch_day(lunar_to_solar(LunarDate(year, month, day, is_leap_month)))

    # ---- lunar date ----
    @property
    def lunar_year(self) -> int:
        return self.lunar.year

    @property
    def lunar_month(self) -> int:
        return self.lunar.month

    @property
    def lunar_day(self) -> int:
        return self.lunar.day

    @property
    def is_leap_month(self) -> bool:
        return self.lunar.is_leap_month

    @property
    def lunar_year_name(self) -> str:
        return cyclical_name(lunar_year_cyclical(self.lunar.year))

    @property
    def lunar_month_name(self) -> str:
        return almanac.lunar_month_name(self.lunar.month, self.lunar.is_leap_month)

    @property
    def lunar_day_name(self) -> str:
        return almanac.lunar_day_name(self.lunar.day)

    # ---- sexagenary cycle ----
    @property
    def cyclical_year(self) -> str:
        return cyclical_name(self.cyclical.year)

    @property
    def cyclical_month(self) -> str:
        return cyclical_name(self.cyclical.month)

    @property
    def cyclical_day(self) -> str:
        return cyclical_name(self.cyclical.day)

    # ---- annotations ----
    @property
    def zodiac(self) -> str:
        return almanac.zodiac(self.lunar.year)

    @property
    def solar_term(self) -> Optional[str]:
        return almanac.solar_term_name(self.solar)

    @property
    def lunar_holiday(self) -> Optional[str]:
        return almanac.lunar_holiday(self.lunar, self.lunar_month_days)

    @property
    def solar_holiday(self) -> Optional[str]:
        return almanac.solar_holiday(self.solar)

    @property
    def pengzu(self) -> Tuple[str, str]:
        return almanac.pengzu_taboos(self.cyclical.day)

    @property
    def conflict(self) -> str:
        return almanac.conflict_zodiac_and_spirit(self.cyclical.day)

    @property
    def five_elements(self) -> str:
        return almanac.five_elements_and_duty(self.cyclical.day, self.cyclical.month)

    @property
    def fetus_god(self) -> str:
        return almanac.fetus_god_position(self.cyclical.day)

    @property
    def day_of_week(self) -> int:
        """Day of the week from 1 (Sunday) to 7 (Saturday)."""

        return self.solar.to_date().isoweekday() % 7 + 1

    @property
    def weekday_name(self) -> str:
        return almanac.weekday_name(self.day_of_week)

    @property
    def display_label(self) -> str:
        return almanac.display_label(self.lunar, self.solar, self.lunar_month_days)

    def twenty_eight_star(self, week_of_year: int, day_of_week: Optional[int] = None) -> str:
        """Mansion star; the caller owns the week numbering rule."""

        if day_of_week is None:
            day_of_week = self.day_of_week
        return almanac.twenty_eight_mansion(week_of_year, day_of_week)

    def as_dict(self) -> Dict[str, object]:
        """Flatten the day into plain values for serialisation."""

        heavenly, earthly = self.pengzu
        return {
            "solar_date": self.solar.to_date(),
            "lunar_year": self.lunar.year,
            "lunar_month": self.lunar.month,
            "lunar_day": self.lunar.day,
            "is_leap_month": self.lunar.is_leap_month,
            "lunar_month_days": self.lunar_month_days,
            "lunar_year_name": self.lunar_year_name,
            "lunar_month_name": self.lunar_month_name,
            "lunar_day_name": self.lunar_day_name,
            "cyclical_year": self.cyclical_year,
            "cyclical_month": self.cyclical_month,
            "cyclical_day": self.cyclical_day,
            "zodiac": self.zodiac,
            "solar_term": self.solar_term,
            "lunar_holiday": self.lunar_holiday,
            "solar_holiday": self.solar_holiday,
            "pengzu_heavenly": heavenly,
            "pengzu_earthly": earthly,
            "conflict": self.conflict,
            "five_elements": self.five_elements,
            "fetus_god": self.fetus_god,
            "day_of_week": self.day_of_week,
            "weekday_name": self.weekday_name,
            "display_label": self.display_label,
        }
