"""solhijri public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

import logging

# Initialize the default calendar on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    set_calendar,
    get_calendar,
    to_solar,
    to_gregorian,
    from_fields,
    is_leap_year,
    leap_years,
    explain,
    new_year_day,
    month_bounds,
    first_day_of_month,
    last_day_of_month,
    days_in_month,
)
from .core.errors import (
    SolhijriError,
    InvalidFieldValue,
    InvalidEra,
    DateMismatch,
    UnsupportedField,
    OutOfTableRange,
    DateOverflowError,
)
from .core.types import ChronoField, Era, Resolution, ResolverStyle, SolarHijriDate, ValueRange
from .engines.calendar import SolarHijriCalendar

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "set_calendar",
    "get_calendar",
    "to_solar",
    "to_gregorian",
    "from_fields",
    "is_leap_year",
    "leap_years",
    "explain",
    "new_year_day",
    "month_bounds",
    "first_day_of_month",
    "last_day_of_month",
    "days_in_month",
    "SolarHijriCalendar",
    "SolarHijriDate",
    "ChronoField",
    "Era",
    "Resolution",
    "ResolverStyle",
    "ValueRange",
    "SolhijriError",
    "InvalidFieldValue",
    "InvalidEra",
    "DateMismatch",
    "UnsupportedField",
    "OutOfTableRange",
    "DateOverflowError",
]
