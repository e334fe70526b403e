"""
solhijri.engines.arithmetic
---------------------------
Date arithmetic over the linear day offset.

Day, month and year deltas are applied by the underlying linear calendar: the offset is
mapped to the underlying date, the native operation runs there (so month-end clamping
and leap-day handling are whatever that calendar does) and the result is mapped back.
With the default ISO calendar, adding one month to 1397/11/11 (2019-01-31) lands on
2019-02-28, i.e. 1397/12/9.

Field replacement is split in two. Day-type fields are a day delta and go through the
same delegation. Year- and month-type fields name a solar year or month, so they are
re-anchored in the solar calendar and the day-of-month is clamped to the new month.
"""

from __future__ import annotations

from datetime import date

from ..core.engine import LinearCalendar
from ..core.types import ChronoField, CivilFields, Era, ValueRange
from .civil import CivilDateConverter

# 1 Farvardin of proleptic year 0: one year before 1/1/1 AH = 0622-03-22.
SOLAR_EPOCH = date(621, 3, 22)

_DAY_FIELDS = (
    ChronoField.DAY_OF_MONTH,
    ChronoField.DAY_OF_YEAR,
    ChronoField.DAY_OF_WEEK,
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH,
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR,
)


class ArithmeticAdapter:
    def __init__(self, converter: CivilDateConverter, linear: LinearCalendar):
        self.converter = converter
        self.linear = linear
        # epoch day = offset + epoch_shift
        self.epoch_shift = linear.to_epoch_day(SOLAR_EPOCH)

    # ---------------------------------------------------------
    # Offset <-> underlying calendar
    # ---------------------------------------------------------

    def to_underlying(self, offset: int) -> date:
        self.converter.check_offset(offset)
        return self.linear.from_epoch_day(offset + self.epoch_shift)

    def from_underlying(self, d: date) -> int:
        return self.converter.check_offset(self.linear.to_epoch_day(d) - self.epoch_shift)

    def epoch_day(self, offset: int) -> int:
        return self.converter.check_offset(offset) + self.epoch_shift

    def from_epoch_day(self, epoch_day: int) -> int:
        return self.converter.check_offset(epoch_day - self.epoch_shift)

    def day_of_week(self, offset: int) -> int:
        return self.linear.day_of_week(self.to_underlying(offset))

    # ---------------------------------------------------------
    # Deltas
    # ---------------------------------------------------------

    def plus_days(self, offset: int, days: int) -> int:
        if days == 0:
            return offset
        return self.from_underlying(self.linear.plus_days(self.to_underlying(offset), days))

    def plus_months(self, offset: int, months: int) -> int:
        if months == 0:
            return offset
        return self.from_underlying(self.linear.plus_months(self.to_underlying(offset), months))

    def plus_years(self, offset: int, years: int) -> int:
        if years == 0:
            return offset
        return self.from_underlying(self.linear.plus_years(self.to_underlying(offset), years))

    # ---------------------------------------------------------
    # Field replacement
    # ---------------------------------------------------------

    def field_range(self, civil: CivilFields, f: ChronoField) -> ValueRange:
        if f is ChronoField.DAY_OF_MONTH:
            return ValueRange(1, self.converter.length_of_month(civil.year, civil.month))
        if f is ChronoField.DAY_OF_YEAR:
            return ValueRange(1, self.converter.length_of_year(civil.year))
        return f.base_range

    def with_field(self, offset: int, f: ChronoField, value: int) -> int:
        civil = self.converter.to_civil(offset)
        if f is ChronoField.ERA:
            era = Era.of(value)
        else:
            value = self.field_range(civil, f).check(value, f)

        if f in _DAY_FIELDS:
            current = {
                ChronoField.DAY_OF_MONTH: civil.day,
                ChronoField.DAY_OF_YEAR: civil.day_of_year,
                ChronoField.DAY_OF_WEEK: None,
                ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH: (civil.day - 1) % 7 + 1,
                ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR: (civil.day_of_year - 1) % 7 + 1,
            }[f]
            if current is None:
                current = self.day_of_week(offset)
            return self.plus_days(offset, value - current)

        if f is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return self.plus_days(offset, 7 * (value - ((civil.day - 1) // 7 + 1)))
        if f is ChronoField.ALIGNED_WEEK_OF_YEAR:
            return self.plus_days(offset, 7 * (value - ((civil.day_of_year - 1) // 7 + 1)))
        if f is ChronoField.EPOCH_DAY:
            return self.from_epoch_day(value)

        year, month = civil.year, civil.month
        if f is ChronoField.YEAR:
            year = value
        elif f is ChronoField.YEAR_OF_ERA:
            year = value if civil.year >= 1 else 1 - value
        elif f is ChronoField.ERA:
            current_era = Era.AH if civil.year >= 1 else Era.BH
            if era is not current_era:
                year = 1 - civil.year
        elif f is ChronoField.MONTH_OF_YEAR:
            month = value
        else:  # PROLEPTIC_MONTH
            year, month = divmod(value, 12)
            month += 1
        return self.resolve_previous_valid(year, month, civil.day)

    def resolve_previous_valid(self, year: int, month: int, day: int) -> int:
        """Offset of (year, month, day) with the day clamped to the month length."""
        day = min(day, self.converter.length_of_month(year, month))
        return self.converter.to_linear(year, month, day)
