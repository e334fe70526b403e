"""
solhijri.core.engine
--------------------
Capabilities the Solar Hijri engine consumes but does not own.

The leap rule hides whether leap years come from a table or a formula; the linear
calendar is the day-counting calendar (ISO by default) that supplies epoch days and
the native day/month/year arithmetic.
"""

from __future__ import annotations
from datetime import date
from typing import Protocol, Tuple


class LeapRule(Protocol):
    @property
    def span(self) -> Tuple[int, int]:
        """Inclusive (first_year, last_year) for which the rule is defined."""
        ...

    def is_leap_year(self, year: int) -> bool: ...

    def leap_years_before(self, year: int) -> int:
        """Number of leap years strictly before ``year`` begins."""
        ...


class LinearCalendar(Protocol):
    def to_epoch_day(self, d: date) -> int: ...
    def from_epoch_day(self, epoch_day: int) -> date: ...
    def plus_days(self, d: date, days: int) -> date: ...
    def plus_months(self, d: date, months: int) -> date: ...
    def plus_years(self, d: date, years: int) -> date: ...
    def length_of_month(self, d: date) -> int: ...

    def day_of_week(self, d: date) -> int:
        """ISO day-of-week, Monday=1 .. Sunday=7."""
        ...
