"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LunarQueryParams(BaseModel):
    """Validated query parameters for the ``/lunar`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    solar_date: date = Field(..., alias="date", description="Gregorian date (YYYY-MM-DD)")
    week_of_year: Optional[int] = Field(
        None,
        ge=1,
        le=54,
        description="Week of the year used for the mansion star; US numbering when omitted",
    )
    day_of_week: Optional[int] = Field(
        None, ge=1, le=7, description="Day of the week, 1 = Sunday ... 7 = Saturday"
    )


class ReverseQueryParams(BaseModel):
    """Validated query parameters for the ``/lunar/reverse`` endpoint."""

    year: int = Field(..., ge=1900, le=2099, description="Lunar year")
    month: int = Field(..., ge=1, le=12, description="Lunar month")
    day: int = Field(..., ge=1, le=30, description="Lunar day")
    leap: bool = Field(False, description="Whether the month is the leap month")


class SolarTermsQueryParams(BaseModel):
    """Validated query parameters for the ``/solar-terms`` endpoint."""

    year: int = Field(..., ge=1900, le=2100, description="Gregorian year")


class LunarDayResponse(BaseModel):
    """A day resolved in both calendars with its almanac annotations."""

    ok: bool = True
    solar_date: date = Field(..., description="Gregorian date")
    lunar_year: int = Field(..., description="Lunar year")
    lunar_month: int = Field(..., description="Lunar month")
    lunar_day: int = Field(..., description="Lunar day of month")
    is_leap_month: bool = Field(..., description="Whether the day falls in a leap month")
    lunar_month_days: int = Field(..., description="Length of the lunar month")
    lunar_year_name: str = Field(..., description="Stem-branch name of the lunar year")
    lunar_month_name: str = Field(..., description="Chinese lunar month name")
    lunar_day_name: str = Field(..., description="Chinese lunar day name")
    cyclical_year: str = Field(..., description="Stem-branch year, turning at 立春")
    cyclical_month: str = Field(..., description="Stem-branch month")
    cyclical_day: str = Field(..., description="Stem-branch day")
    zodiac: str = Field(..., description="Zodiac animal of the lunar year")
    solar_term: Optional[str] = Field(None, description="Solar term falling on the day")
    lunar_holiday: Optional[str] = Field(None, description="Traditional festival")
    solar_holiday: Optional[str] = Field(None, description="Gregorian holiday")
    pengzu_heavenly: str = Field(..., description="Pengzu taboo for the day stem")
    pengzu_earthly: str = Field(..., description="Pengzu taboo for the day branch")
    conflict: str = Field(..., description="Clashing zodiac and evil-spirit direction")
    five_elements: str = Field(..., description="Na yin element and duty officer")
    fetus_god: str = Field(..., description="Fetus god position and direction")
    day_of_week: int = Field(..., description="1 = Sunday ... 7 = Saturday")
    weekday_name: str = Field(..., description="Chinese weekday name")
    display_label: str = Field(..., description="Caption shown in a calendar cell")
    week_of_year: int = Field(..., description="Week of the year used for the mansion star")
    twenty_eight_star: str = Field(..., description="Mansion star with direction and fortune")


class SolarTermEntry(BaseModel):
    name: str = Field(..., description="Solar term name")
    solar_date: date = Field(..., description="Approximate Gregorian date")


class SolarTermsResponse(BaseModel):
    """The 24 solar terms of a Gregorian year."""

    ok: bool = True
    year: int
    terms: List[SolarTermEntry]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    first_year: int
    last_year: int


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
