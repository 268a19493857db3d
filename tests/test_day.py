from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from lunarcal import InvalidDateError, LunarCalendarDay, LunarDate, LunarRangeError, SolarDate


def test_lunar_new_year_2024():
    day = LunarCalendarDay.from_solar(2024, 2, 10)
    assert day.lunar == LunarDate(2024, 1, 1)
    assert day.lunar_year_name == "甲辰"
    assert day.zodiac == "龙"
    assert day.lunar_month_name == "正"
    assert day.lunar_day_name == "初一"
    assert day.lunar_holiday == "春节"
    assert day.display_label == "春节"
    assert day.cyclical_year == "甲辰"
    assert day.cyclical_month == "丙寅"
    assert day.cyclical_day == "甲辰"
    assert day.conflict == "冲狗(戊戌)煞南"
    assert day.five_elements == "灯头火 满执位"
    assert day.pengzu == ("甲不开仓\n财物耗亡", "辰不哭泣\n必主重丧")
    assert day.solar_term is None
    assert day.day_of_week == 7
    assert day.weekday_name == "六"


def test_first_supported_day():
    day = LunarCalendarDay.from_solar(1900, 1, 31)
    assert day.lunar == LunarDate(1900, 1, 1)
    assert day.cyclical_day == "甲辰"
    assert day.lunar_year_name == "庚子"


def test_last_supported_day():
    day = LunarCalendarDay.from_solar(2100, 2, 8)
    assert day.lunar == LunarDate(2099, 12, 30)
    assert day.lunar_holiday == "除夕"


def test_leap_month_day():
    day = LunarCalendarDay.from_lunar(2017, 6, 1, is_leap_month=True)
    assert day.solar == SolarDate(2017, 7, 23)
    assert day.is_leap_month
    assert day.lunar_month_name == "闰六"
    assert day.lunar_month_days == 30


def test_new_years_eve_after_thirty_day_month():
    day = LunarCalendarDay.from_lunar(2020, 12, 30)
    assert day.solar == SolarDate(2021, 2, 11)
    assert day.lunar_holiday == "除夕"
    assert day.display_label == "除夕"


def test_new_years_eve_after_twenty_nine_day_month():
    day = LunarCalendarDay.from_solar(2022, 1, 31)
    assert day.lunar == LunarDate(2021, 12, 29)
    assert day.lunar_month_days == 29
    assert day.lunar_holiday == "除夕"


def test_twenty_ninth_of_thirty_day_twelfth_month_is_not_eve():
    day = LunarCalendarDay.from_lunar(2020, 12, 29)
    assert day.lunar_holiday is None
    assert day.display_label == "廿九"


def test_leap_month_hides_festival():
    assert LunarCalendarDay.from_lunar(2009, 5, 5).lunar_holiday == "端午节"
    assert LunarCalendarDay.from_lunar(2009, 5, 5, True).lunar_holiday is None


def test_solar_term_day():
    day = LunarCalendarDay.from_solar(2024, 2, 4)
    assert day.lunar == LunarDate(2023, 12, 25)
    assert day.solar_term == "立春"
    assert day.display_label == "立春"
    assert day.cyclical_year == "甲辰"


def test_from_date_and_timestamp_agree():
    by_date = LunarCalendarDay.from_date(date(1970, 1, 1))
    assert LunarCalendarDay.from_timestamp(0) == by_date
    assert LunarCalendarDay.from_timestamp(86_399_999) == by_date
    assert LunarCalendarDay.from_timestamp(-1).solar == SolarDate(1969, 12, 31)


def test_from_epoch_day():
    assert LunarCalendarDay.from_epoch_day(19763).solar == SolarDate(2024, 2, 10)


@pytest.mark.parametrize(
    "solar",
    [(1899, 12, 31), (1900, 1, 30), (2100, 2, 9), (2101, 1, 1)],
)
def test_solar_outside_range(solar):
    with pytest.raises(LunarRangeError):
        LunarCalendarDay.from_solar(*solar)


def test_lunar_outside_range():
    with pytest.raises(LunarRangeError):
        LunarCalendarDay.from_lunar(2100, 1, 1)


def test_invalid_dates():
    with pytest.raises(InvalidDateError):
        LunarCalendarDay.from_solar(2023, 2, 29)
    with pytest.raises(InvalidDateError):
        LunarCalendarDay.from_lunar(2021, 12, 30)
    with pytest.raises(InvalidDateError):
        LunarCalendarDay.from_lunar(2021, 6, 1, True)


def test_daily_annotations_repeat_every_sixty_days():
    first = LunarCalendarDay.from_solar(2024, 3, 1)
    later = LunarCalendarDay.from_epoch_day(first.epoch_day + 60)
    assert later.cyclical_day == first.cyclical_day
    assert later.pengzu == first.pengzu
    assert later.conflict == first.conflict
    assert later.fetus_god == first.fetus_god


def test_twenty_eight_star():
    day = LunarCalendarDay.from_solar(2024, 2, 10)
    assert day.twenty_eight_star(6) == "北方女士蝠-凶"
    assert day.twenty_eight_star(1, 1) == "东方房日兔-吉"


def test_as_dict():
    payload = LunarCalendarDay.from_solar(2017, 10, 4).as_dict()
    assert payload["solar_date"] == date(2017, 10, 4)
    assert payload["lunar_month"] == 8
    assert payload["lunar_day"] == 15
    assert payload["lunar_holiday"] == "中秋节"
    assert payload["lunar_day_name"] == "十五"
    assert payload["is_leap_month"] is False
    assert "twenty_eight_star" not in payload


def test_concurrent_resolution_matches_sequential():
    epoch_days = list(range(19000, 19400))
    sequential = [LunarCalendarDay.from_epoch_day(day) for day in epoch_days]
    with ThreadPoolExecutor(max_workers=4) as pool:
        concurrent = list(pool.map(LunarCalendarDay.from_epoch_day, epoch_days))
    assert concurrent == sequential
