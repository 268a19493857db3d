"""Chinese lunar calendar conversion and almanac annotations for 1900-2099."""

from .converter import LunarDate, SolarDate, lunar_to_solar, solar_to_lunar
from .day import LunarCalendarDay
from .errors import CalendarError, InvalidDateError, LunarRangeError, TableIntegrityError
from .solar_terms import solar_term_date, solar_terms_of_year

__all__ = [
    "CalendarError",
    "InvalidDateError",
    "LunarCalendarDay",
    "LunarDate",
    "LunarRangeError",
    "SolarDate",
    "TableIntegrityError",
    "lunar_to_solar",
    "solar_term_date",
    "solar_terms_of_year",
    "solar_to_lunar",
]
