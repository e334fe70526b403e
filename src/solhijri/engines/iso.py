"""
solhijri.engines.iso
--------------------
Proleptic ISO (Gregorian) calendar used as the underlying day-counting calendar.

Month and year deltas use dateutil's relativedelta, which clamps to the last day of
the target month (2019-01-31 + 1 month -> 2019-02-28).
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ..core.errors import DateOverflowError
from ..core.time import from_epoch_day, to_epoch_day


class IsoCalendar:
    """Implements the LinearCalendar protocol over datetime.date."""

    name = "ISO"

    def to_epoch_day(self, d: date) -> int:
        return to_epoch_day(d)

    def from_epoch_day(self, epoch_day: int) -> date:
        try:
            return from_epoch_day(epoch_day)
        except ValueError as e:
            raise DateOverflowError(f"Epoch day {epoch_day} is outside the ISO date range: {e}") from e

    def plus_days(self, d: date, days: int) -> date:
        try:
            return d + timedelta(days=days)
        except OverflowError as e:
            raise DateOverflowError(f"{d.isoformat()} + {days} days overflows: {e}") from e

    def plus_months(self, d: date, months: int) -> date:
        try:
            return d + relativedelta(months=months)
        except (OverflowError, ValueError) as e:
            raise DateOverflowError(f"{d.isoformat()} + {months} months overflows: {e}") from e

    def plus_years(self, d: date, years: int) -> date:
        try:
            return d + relativedelta(years=years)
        except (OverflowError, ValueError) as e:
            raise DateOverflowError(f"{d.isoformat()} + {years} years overflows: {e}") from e

    def length_of_month(self, d: date) -> int:
        return calendar.monthrange(d.year, d.month)[1]

    def day_of_week(self, d: date) -> int:
        return d.isoweekday()
