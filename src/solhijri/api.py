from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

from .core.types import ChronoField, ResolverStyle, SolarHijriDate
from .engines.calendar import SolarHijriCalendar

_calendar: Optional[SolarHijriCalendar] = None

def set_calendar(cal: SolarHijriCalendar) -> None:
    global _calendar
    _calendar = cal

def get_calendar() -> SolarHijriCalendar:
    if _calendar is None:
        raise RuntimeError("Calendar not initialized")
    return _calendar

def to_solar(d: date) -> SolarHijriDate:
    return get_calendar().from_iso(d)

def to_gregorian(year: int, month: int, day: int) -> date:
    return get_calendar().date(year, month, day).to_iso()

def from_fields(
    fields: Mapping[Union[str, ChronoField], int],
    style: Union[str, ResolverStyle] = ResolverStyle.SMART,
) -> Optional[SolarHijriDate]:
    """Resolve a field mapping (keys may be ChronoField members or names like 'day-of-month')."""
    return get_calendar().resolve_date(fields, style)

def is_leap_year(year: int) -> bool:
    return get_calendar().is_leap_year(year)

def leap_years(start: int, end: int) -> List[int]:
    return list(get_calendar().leap_years(start, end))

def explain(d: date) -> Dict[str, Any]:
    """Debug view of one ISO date: civil fields, offsets and the leap bookkeeping behind them."""
    cal = get_calendar()
    s = cal.from_iso(d)
    return {
        "iso": d,
        "solar": s.as_tuple(),
        "era": s.era.name,
        "year_of_era": s.year_of_era,
        "day_of_year": s.day_of_year,
        "day_of_week": s.day_of_week,
        "offset": s.linear_day_offset,
        "epoch_day": s.epoch_day,
        "leap_year": s.is_leap_year(),
        "leap_years_before": cal.table.leap_years_before(s.year),
        "length_of_month": s.length_of_month(),
        "length_of_year": s.length_of_year(),
    }

# ============================================================
# Month- and year-level helpers
# ============================================================

def new_year_day(Y: int, *, as_date: bool = True) -> dict:
    """1 Farvardin of year Y."""
    s = get_calendar().date(Y, 1, 1)
    out = {"Y": Y, "offset": s.linear_day_offset, "epoch_day": s.epoch_day, "leap": s.is_leap_year()}
    if as_date:
        out["date"] = s.to_iso()
    return out

def month_bounds(Y: int, M: int, *, as_date: bool = True) -> dict:
    cal = get_calendar()
    first = cal.date(Y, M, 1)
    last = cal.date(Y, M, first.length_of_month())

    out = {
        "Y": Y, "M": M, "length": first.length_of_month(),
        "first_offset": first.linear_day_offset, "last_offset": last.linear_day_offset,
    }
    if as_date:
        out["first_date"] = first.to_iso()
        out["last_date"] = last.to_iso()
    return out

def first_day_of_month(Y: int, M: int) -> date:
    return month_bounds(Y, M)["first_date"]

def last_day_of_month(Y: int, M: int) -> date:
    return month_bounds(Y, M)["last_date"]

def days_in_month(Y: int, M: int) -> List[Dict[str, Any]]:
    cal = get_calendar()
    first = cal.date(Y, M, 1)
    rows = []
    for i in range(first.length_of_month()):
        s = first.plus_days(i)
        rows.append({
            "date": s.to_iso(),
            "day": s.day,
            "day_of_year": s.day_of_year,
            "day_of_week": s.day_of_week,
            "epoch_day": s.epoch_day,
        })
    return rows
