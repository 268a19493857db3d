from __future__ import annotations

import pytest

import lunarcal.tables as tables
from lunarcal.errors import InvalidDateError, LunarRangeError, TableIntegrityError
from lunarcal.tables import (
    FIRST_YEAR,
    LAST_YEAR,
    leap_month_length,
    leap_month_of,
    lookup,
    month_length,
    solar_term_offset_minutes,
    year_length,
)


@pytest.mark.parametrize(
    "year, expected",
    [(1900, 8), (1984, 10), (2017, 6), (2020, 4), (2023, 2), (2025, 6), (2099, 2)],
)
def test_leap_month_of_known_years(year, expected):
    assert leap_month_of(year) == expected


@pytest.mark.parametrize("year", [1901, 2021, 2022, 2024])
def test_years_without_leap_month(year):
    assert leap_month_of(year) is None
    assert leap_month_length(year) is None


def test_both_sentinel_nibbles_mean_no_leap_month():
    nibbles = {encoding & 0xF for encoding in tables.YEAR_TABLE[: LAST_YEAR - FIRST_YEAR + 1]}
    assert 0x0 in nibbles
    assert 0xF in nibbles
    for year in range(FIRST_YEAR, LAST_YEAR + 1):
        if tables.YEAR_TABLE[year - FIRST_YEAR] & 0xF in (0x0, 0xF):
            assert leap_month_of(year) is None


@pytest.mark.parametrize(
    "year, expected", [(2017, 30), (2020, 29), (2006, 29), (2012, 29), (1984, 29)]
)
def test_leap_month_length_follows_next_year_nibble(year, expected):
    assert leap_month_length(year) == expected


def test_month_lengths_2017():
    lengths = [month_length(2017, month) for month in range(1, 13)]
    assert lengths == [29, 30, 29, 30, 29, 29, 29, 30, 29, 30, 30, 30]


def test_month_lengths_2020():
    lengths = [month_length(2020, month) for month in range(1, 13)]
    assert lengths == [29, 30, 30, 30, 30, 29, 29, 30, 29, 30, 29, 30]


@pytest.mark.parametrize(
    "year, expected", [(2017, 384), (2020, 384), (2021, 354), (2022, 355)]
)
def test_year_length(year, expected):
    assert year_length(year) == expected


def test_year_length_is_sum_of_months():
    for year in range(FIRST_YEAR, LAST_YEAR + 1):
        total = sum(month_length(year, month) for month in range(1, 13))
        total += leap_month_length(year) or 0
        assert year_length(year) == total
        assert year_length(year) in (353, 354, 355, 383, 384, 385)


def test_whole_range_spans_from_1900_01_31_to_2100_02_08():
    # 1900-01-31 .. 2100-02-08 inclusive
    total = sum(year_length(year) for year in range(FIRST_YEAR, LAST_YEAR + 1))
    assert total == 47520 - (-25537) + 1


@pytest.mark.parametrize("year", [FIRST_YEAR - 1, LAST_YEAR + 1])
def test_years_outside_table_raise_range_error(year):
    with pytest.raises(LunarRangeError):
        leap_month_of(year)
    with pytest.raises(LunarRangeError):
        year_length(year)


@pytest.mark.parametrize("month", [0, 13])
def test_month_length_rejects_bad_month(month):
    with pytest.raises(InvalidDateError):
        month_length(2020, month)


def test_range_error_is_a_value_error():
    with pytest.raises(ValueError):
        leap_month_of(2100)


@pytest.mark.parametrize("index", [-1, 24])
def test_solar_term_offset_index_bounds(index):
    with pytest.raises(IndexError):
        solar_term_offset_minutes(index)


def test_lookup_rejects_negative_index():
    with pytest.raises(IndexError):
        lookup(("a", "b"), -1, "demo")
    assert lookup(("a", "b"), 1, "demo") == "b"


def test_verify_year_table_accepts_shipped_table():
    tables.verify_year_table()


def test_verify_year_table_rejects_undefined_nibble(monkeypatch):
    corrupted = list(tables.YEAR_TABLE)
    corrupted[5] = 0x4add
    monkeypatch.setattr(tables, "YEAR_TABLE", tuple(corrupted))
    with pytest.raises(TableIntegrityError, match="1905"):
        tables.verify_year_table()


def test_verify_year_table_rejects_short_table(monkeypatch):
    monkeypatch.setattr(tables, "YEAR_TABLE", tables.YEAR_TABLE[:-1])
    with pytest.raises(TableIntegrityError):
        tables.verify_year_table()
