"""Almanac annotations derived from resolved solar, lunar and cyclical values.

Every function here is total over already-validated input: the date context
rejects bad dates before any of these are called.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .converter import LunarDate, SolarDate
from .cyclical import branch_of, stem_of
from .solar_terms import solar_term_date
from .tables import (
    EARTHLY_BRANCHES,
    EVIL_SPIRIT,
    FETUS_GOD_DIRECTION,
    FETUS_GOD_EARTHLY,
    FETUS_GOD_HEAVENLY,
    FIVE_ELEMENTS,
    HEAVENLY_STEMS,
    LUNAR_HOLIDAYS,
    LUNAR_NUMERALS,
    LUNAR_SPECIAL_WORDS,
    NEW_YEARS_EVE,
    PENGZU_EARTHLY,
    PENGZU_HEAVENLY,
    SOLAR_HOLIDAYS,
    SOLAR_TERMS,
    TWELVE_DUTY,
    TWENTY_EIGHT_STARS,
    WEEKDAY_NAMES,
    ZODIAC,
    lookup,
    zodiac_animal,
)

__all__ = [
    "conflict_zodiac_and_spirit",
    "display_label",
    "duty_index",
    "fetus_god_position",
    "five_elements_and_duty",
    "lunar_day_name",
    "lunar_holiday",
    "lunar_month_name",
    "pengzu_taboos",
    "solar_holiday",
    "solar_term_name",
    "twenty_eight_mansion",
    "weekday_name",
    "zodiac",
]

# (upper bound of the day index, direction index); indices from 56 up wrap to 2.
_FETUS_DIRECTION_BUCKETS: Tuple[Tuple[int, int], ...] = (
    (2, 2),
    (6, 3),
    (12, 4),
    (17, 5),
    (23, 6),
    (28, 7),
    (33, 8),
    (39, 9),
    (44, 10),
    (50, 0),
    (56, 1),
)

_MONTH_WORDS = {
    1: LUNAR_SPECIAL_WORDS[4],
    10: LUNAR_SPECIAL_WORDS[1],
    11: LUNAR_SPECIAL_WORDS[5],
    12: LUNAR_SPECIAL_WORDS[6],
}

LEAP_PREFIX = LUNAR_SPECIAL_WORDS[7]


def zodiac(lunar_year: int) -> str:
    return zodiac_animal((lunar_year - 4) % 12)


def solar_term_name(solar: SolarDate) -> Optional[str]:
    """Name of the solar term falling on *solar*, if any."""

    first = (solar.month - 1) * 2
    for index in (first, first + 1):
        _, day = solar_term_date(solar.year, index)
        if day == solar.day:
            return SOLAR_TERMS[index]
    return None


def lunar_holiday(lunar: LunarDate, month_days: int) -> Optional[str]:
    """Traditional festival on *lunar*; *month_days* is that month's length.

    除夕 is the last day of the twelfth month, whether it has 29 or 30 days.
    Leap months carry no festivals.
    """

    if lunar.is_leap_month:
        return None
    if lunar.month == 12 and lunar.day == month_days:
        return NEW_YEARS_EVE
    for holiday in LUNAR_HOLIDAYS:
        if holiday.month == lunar.month and holiday.day == lunar.day:
            return holiday.name
    return None


def solar_holiday(solar: SolarDate) -> Optional[str]:
    for holiday in SOLAR_HOLIDAYS:
        if holiday.month == solar.month and holiday.day == solar.day:
            return holiday.name
    return None


def pengzu_taboos(day_index: int) -> Tuple[str, str]:
    return PENGZU_HEAVENLY[stem_of(day_index)], PENGZU_EARTHLY[branch_of(day_index)]


def conflict_zodiac_and_spirit(day_index: int) -> str:
    """Clashing animal with its stem-branch pair and the evil-spirit direction.

    >>> conflict_zodiac_and_spirit(0)
    '冲马(戊午)煞南'
    """

    stem = stem_of(day_index)
    branch = branch_of(day_index)
    conflict_stem = stem + 4 if stem < 6 else stem - 6
    conflict_branch = branch + 6 if branch < 6 else branch - 6
    return (
        f"冲{ZODIAC[conflict_branch]}"
        f"({HEAVENLY_STEMS[conflict_stem]}{EARTHLY_BRANCHES[conflict_branch]})"
        f"煞{EVIL_SPIRIT[branch % 4]}"
    )


def twenty_eight_mansion(week_of_year: int, day_of_week: int) -> str:
    """Mansion star for a day, given its week of year and its weekday.

    Week numbering belongs to the caller; *day_of_week* runs from 1 (Sunday)
    to 7 (Saturday).
    """

    row = lookup(TWENTY_EIGHT_STARS, (week_of_year - 1) % 4, "mansion week")
    star = lookup(row, day_of_week - 1, "day of week")
    return f"{star.direction}{star.name}-{star.fortune}"


def duty_index(day_index: int, month_index: int) -> int:
    """Index into the twelve duty officers for a day in a given month."""

    month_branch = branch_of(month_index)
    month_offset = month_branch - 2 if month_branch >= 2 else 12 - month_branch
    base = 12 - (12 if month_offset == 0 else month_offset)
    return (branch_of(day_index) + base) % 12


def five_elements_and_duty(day_index: int, month_index: int) -> str:
    element = FIVE_ELEMENTS[day_index // 2]
    return f"{element} {TWELVE_DUTY[duty_index(day_index, month_index)]}执位"


def _fetus_direction_index(day_index: int) -> int:
    for upper, direction in _FETUS_DIRECTION_BUCKETS:
        if day_index < upper:
            return direction
    return 2


def fetus_god_position(day_index: int) -> str:
    heavenly = FETUS_GOD_HEAVENLY[stem_of(day_index) % 5]
    earthly = FETUS_GOD_EARTHLY[branch_of(day_index) % 5]
    if earthly in heavenly:
        position = heavenly
    elif heavenly in earthly:
        position = earthly
    else:
        position = heavenly + earthly
    if len(position) <= 2:
        position = "占" + position
    return position + FETUS_GOD_DIRECTION[_fetus_direction_index(day_index)]


def lunar_month_name(month: int, is_leap_month: bool = False) -> str:
    """Chinese month name: 正, 二 ... 九, 十, 冬, 腊, prefixed with 闰 for leap months."""

    if not 1 <= month <= 12:
        raise IndexError(f"lunar month {month} outside [1, 12]")
    name = _MONTH_WORDS.get(month, LUNAR_NUMERALS[month % 10])
    return (LEAP_PREFIX if is_leap_month else "") + name


def lunar_day_name(day: int) -> str:
    """Chinese day name: 初一 ... 初十, 十一 ... 二十, 廿一 ... 三十."""

    if not 1 <= day <= 30:
        raise IndexError(f"lunar day {day} outside [1, 30]")
    tens, units = divmod(day, 10)
    if day <= 10:
        return LUNAR_SPECIAL_WORDS[0] + (LUNAR_NUMERALS[units] if units else LUNAR_SPECIAL_WORDS[1])
    if units == 0:
        return LUNAR_NUMERALS[tens] + LUNAR_SPECIAL_WORDS[1]
    return LUNAR_SPECIAL_WORDS[tens] + LUNAR_NUMERALS[units]


def weekday_name(day_of_week: int) -> str:
    return lookup(WEEKDAY_NAMES, day_of_week - 1, "day of week")


def display_label(
    lunar: LunarDate,
    solar: SolarDate,
    month_days: int,
) -> str:
    """Caption for a calendar cell: festival, else solar term, else lunar day."""

    holiday = lunar_holiday(lunar, month_days) or solar_holiday(solar)
    if holiday:
        return holiday
    return solar_term_name(solar) or lunar_day_name(lunar.day)
