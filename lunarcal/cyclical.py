"""Sexagenary (stem-branch) indices for years, months and days."""

from __future__ import annotations

from typing import NamedTuple

from .converter import SolarDate, epoch_day_of
from .solar_terms import solar_term_date
from .tables import FIRST_YEAR, earthly_branch, heavenly_stem

__all__ = [
    "CyclicalIndices",
    "branch_of",
    "cyclical_day",
    "cyclical_indices",
    "cyclical_month",
    "cyclical_name",
    "cyclical_year",
    "lunar_year_cyclical",
    "stem_of",
]

# 1970-01-01 sits 25567 days after 1900-01-01; the extra 10 lines the cycle up
# with 1900-01-01 being 甲戌.
DAY_CYCLE_OFFSET = 25567 + 10

START_OF_SPRING = 2


class CyclicalIndices(NamedTuple):
    year: int
    month: int
    day: int


def stem_of(index: int) -> int:
    return index % 10


def branch_of(index: int) -> int:
    return index % 12


def cyclical_name(index: int) -> str:
    """Stem and branch characters of a cycle index, e.g. ``0 -> 甲子``."""

    return heavenly_stem(stem_of(index)) + earthly_branch(branch_of(index))


def cyclical_year(solar: SolarDate) -> int:
    """Year index; the year turns over on the day of 立春, not on January 1."""

    _, spring_day = solar_term_date(solar.year, START_OF_SPRING)
    if solar.month < 2 or (solar.month == 2 and solar.day < spring_day):
        return (solar.year - FIRST_YEAR + 35) % 60
    return (solar.year - FIRST_YEAR + 36) % 60


def cyclical_month(solar: SolarDate) -> int:
    """Month index; the month turns over on the first solar term of each month."""

    month = solar.month - 1
    _, first_node = solar_term_date(solar.year, month * 2)
    base = (solar.year - FIRST_YEAR) * 12 + month
    if solar.day < first_node:
        return (base + 12) % 60
    return (base + 13) % 60


def cyclical_day(solar: SolarDate) -> int:
    return (epoch_day_of(solar) + DAY_CYCLE_OFFSET) % 60


def cyclical_indices(solar: SolarDate) -> CyclicalIndices:
    return CyclicalIndices(
        year=cyclical_year(solar),
        month=cyclical_month(solar),
        day=cyclical_day(solar),
    )


def lunar_year_cyclical(lunar_year: int) -> int:
    """Index naming a lunar year from its own new year, e.g. 1984 -> 甲子."""

    return (lunar_year - FIRST_YEAR + 36) % 60
