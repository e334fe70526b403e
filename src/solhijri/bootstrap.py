from __future__ import annotations
from solhijri.engines.calendar import SolarHijriCalendar
from solhijri.engines.iso import IsoCalendar
from solhijri.engines.leap_years import leap_year_table

def build_calendar() -> SolarHijriCalendar:
    return SolarHijriCalendar(table=leap_year_table(), linear=IsoCalendar())
