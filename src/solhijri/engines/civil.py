"""
solhijri.engines.civil
----------------------
Bidirectional map between the linear day offset (days since 1 Farvardin of year 0)
and the civil (year, month, day, day-of-year) decomposition.

Months 1-6 have 31 days, months 7-11 have 30, month 12 has 29 (30 in a leap year).
"""

from __future__ import annotations

from typing import Tuple

from ..core.engine import LeapRule
from ..core.errors import InvalidFieldValue, OutOfTableRange
from ..core.types import ChronoField, CivilFields

DAYS_IN_COMMON_YEAR = 365

# Six 31-day months open the year.
FIRST_HALF_DAYS = 6 * 31


def days_before_month(month: int) -> int:
    if month <= 6:
        return (month - 1) * 31
    return FIRST_HALF_DAYS + (month - 7) * 30


def month_day_from_day_of_year(d0: int) -> Tuple[int, int]:
    """(month, day) for a 0-based day-of-year."""
    if d0 < FIRST_HALF_DAYS:
        return d0 // 31 + 1, d0 % 31 + 1
    r = d0 - FIRST_HALF_DAYS
    return 7 + r // 30, r % 30 + 1


class CivilDateConverter:
    """
    Pure arithmetic over a leap rule; holds no date state.
    """
    def __init__(self, rule: LeapRule):
        self.rule = rule
        first, last = rule.span
        self.first_year = first
        self.last_year = last
        self.min_offset = self.days_before_year(first)
        self.max_offset = self.days_before_year(last + 1) - 1

    # ---------------------------------------------------------
    # Year and month lengths
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.rule.is_leap_year(year)

    def days_before_year(self, year: int) -> int:
        """Linear offset of 1 Farvardin of ``year``."""
        return DAYS_IN_COMMON_YEAR * year + self.rule.leap_years_before(year)

    def length_of_year(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def length_of_month(self, year: int, month: int) -> int:
        ChronoField.MONTH_OF_YEAR.check(month)
        if month <= 6:
            return 31
        if month <= 11:
            return 30
        return 30 if self.is_leap_year(year) else 29

    @property
    def offset_span(self) -> Tuple[int, int]:
        return (self.min_offset, self.max_offset)

    def check_offset(self, offset: int) -> int:
        if not (self.min_offset <= offset <= self.max_offset):
            raise OutOfTableRange(
                f"Day offset {offset} is outside the supported range "
                f"[{self.min_offset}, {self.max_offset}]",
                value=offset,
                span=self.offset_span,
            )
        return offset

    # ---------------------------------------------------------
    # Offset -> civil
    # ---------------------------------------------------------

    def to_civil(self, offset: int) -> CivilFields:
        self.check_offset(offset)

        # Leap days accumulated before the estimated year shift the estimate itself,
        # so the correction is applied twice.
        year = offset // DAYS_IN_COMMON_YEAR
        leaps = self.rule.leap_years_before(year)
        year = (offset - leaps) // DAYS_IN_COMMON_YEAR
        leaps = self.rule.leap_years_before(year)
        year += leaps // DAYS_IN_COMMON_YEAR

        d0 = offset - year * DAYS_IN_COMMON_YEAR - leaps
        if d0 >= DAYS_IN_COMMON_YEAR and not self.is_leap_year(year):
            # estimate landed one common year short
            year += 1
            d0 -= DAYS_IN_COMMON_YEAR

        month, day = month_day_from_day_of_year(d0)
        return CivilFields(year, month, day, d0 + 1)

    # ---------------------------------------------------------
    # Civil -> offset
    # ---------------------------------------------------------

    def to_linear(self, year: int, month: int, day: int) -> int:
        self.rule_check_year(year)
        ChronoField.MONTH_OF_YEAR.check(month)
        length = self.length_of_month(year, month)
        if not (1 <= day <= length):
            if month == 12 and day == 30:
                msg = f"Invalid date 30 Esfand {year}: {year} is not a leap year"
            else:
                msg = f"Invalid value for day-of-month (valid values 1 - {length}): {day}"
            raise InvalidFieldValue(msg, field=ChronoField.DAY_OF_MONTH, value=day)
        return self.days_before_year(year) + days_before_month(month) + day - 1

    def year_day_to_linear(self, year: int, day_of_year: int) -> int:
        self.rule_check_year(year)
        length = self.length_of_year(year)
        if not (1 <= day_of_year <= length):
            raise InvalidFieldValue(
                f"Invalid value for day-of-year (valid values 1 - {length}): {day_of_year}",
                field=ChronoField.DAY_OF_YEAR,
                value=day_of_year,
            )
        return self.days_before_year(year) + day_of_year - 1

    def rule_check_year(self, year: int) -> int:
        if not (self.first_year <= year <= self.last_year):
            raise OutOfTableRange(
                f"Year {year} is outside the leap-year table [{self.first_year}, {self.last_year}]",
                value=year,
                span=(self.first_year, self.last_year),
            )
        return year
