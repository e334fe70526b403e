"""
solhijri.engines.calendar
-------------------------
The Orchestrator. Binds the leap-year table, the civil converter, the arithmetic
adapter and the field resolver into one calendar and hands out SolarHijriDate values.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Mapping, Optional, Tuple, Union

from ..core.engine import LeapRule, LinearCalendar
from ..core.errors import DateMismatch
from ..core.types import ChronoField, Era, Resolution, ResolverStyle, SolarHijriDate, ValueRange
from .arithmetic import ArithmeticAdapter
from .civil import CivilDateConverter
from .iso import IsoCalendar
from .leap_years import leap_year_table
from .resolver import FieldResolver, proleptic_year


class SolarHijriCalendar:
    """
    The Solar Hijri (Iranian) calendar.

    Twelve months: six of 31 days, five of 30, and Esfand with 29 days (30 in a leap
    year). Year 1 AH begins on 0622-03-22; years <= 0 belong to the BH era.
    """

    id = "SolarHijrah"
    calendar_type = "Solar Hijrah"

    def __init__(self, table: Optional[LeapRule] = None, linear: Optional[LinearCalendar] = None):
        self.table = table if table is not None else leap_year_table()
        self.linear = linear if linear is not None else IsoCalendar()
        self.converter = CivilDateConverter(self.table)
        self.adapter = ArithmeticAdapter(self.converter, self.linear)
        self.resolver = FieldResolver(self.converter, self.adapter, self.date_linear)

    def __repr__(self) -> str:
        return f"SolarHijriCalendar(years={self.table.span})"

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    def date_linear(self, offset: int) -> SolarHijriDate:
        return SolarHijriDate(self.converter.check_offset(offset), self)

    def date(self, year: int, month: int, day: int) -> SolarHijriDate:
        return SolarHijriDate(self.converter.to_linear(year, month, day), self)

    def date_era(self, era: Union[int, Era], year_of_era: int, month: int, day: int) -> SolarHijriDate:
        return self.date(self.proleptic_year(era, year_of_era), month, day)

    def date_year_day(self, year: int, day_of_year: int) -> SolarHijriDate:
        return SolarHijriDate(self.converter.year_day_to_linear(year, day_of_year), self)

    def date_era_year_day(self, era: Union[int, Era], year_of_era: int, day_of_year: int) -> SolarHijriDate:
        return self.date_year_day(self.proleptic_year(era, year_of_era), day_of_year)

    def date_epoch_day(self, epoch_day: int) -> SolarHijriDate:
        return SolarHijriDate(self.adapter.from_epoch_day(epoch_day), self)

    def from_iso(self, d: date) -> SolarHijriDate:
        return SolarHijriDate(self.adapter.from_underlying(d), self)

    def from_tuple(self, t: Tuple[int, int, int]) -> SolarHijriDate:
        """Inverse of SolarHijriDate.as_tuple; validates like date()."""
        year, month, day = t
        return self.date(year, month, day)

    def date_now(self, clock: Optional[Callable[[], date]] = None) -> SolarHijriDate:
        today = (clock or date.today)()
        return self.from_iso(today)

    # ---------------------------------------------------------
    # Field resolution
    # ---------------------------------------------------------

    def resolve(
        self,
        fields: Mapping[Union[str, ChronoField], int],
        style: Union[str, ResolverStyle] = ResolverStyle.SMART,
    ) -> Resolution:
        return self.resolver.resolve(fields, style)

    def resolve_date(
        self,
        fields: Mapping[Union[str, ChronoField], int],
        style: Union[str, ResolverStyle] = ResolverStyle.SMART,
    ) -> Optional[SolarHijriDate]:
        """
        Resolve ``fields`` to a date, or None if they do not locate a day.

        Fields left over by the resolver must agree with the resolved date.
        """
        res = self.resolve(fields, style)
        if res.date is None:
            return None
        for f, value in res.remaining.items():
            actual = res.date.get(f)
            if actual != value:
                raise DateMismatch(
                    f"Conflict found: field {f.key} {actual} differs from {f.key} {value} "
                    f"derived from {res.date!r}"
                )
        return res.date

    # ---------------------------------------------------------
    # Chronology queries
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.table.is_leap_year(year)

    def leap_years(self, start: int, end: int) -> Tuple[int, ...]:
        return tuple(y for y in range(max(start, self.min_year), min(end, self.max_year) + 1)
                     if self.table.is_leap_year(y))

    @property
    def min_year(self) -> int:
        return self.converter.first_year

    @property
    def max_year(self) -> int:
        return self.converter.last_year

    def proleptic_year(self, era: Union[int, Era], year_of_era: int) -> int:
        return proleptic_year(Era.of(era), year_of_era)

    def era_of(self, value: int) -> Era:
        return Era.of(value)

    def eras(self) -> Tuple[Era, ...]:
        return tuple(Era)

    def year_of_era_range(self, era: Optional[Era] = None) -> ValueRange:
        if era is Era.BH:
            return ValueRange(1, 1 - self.min_year)
        if era is Era.AH:
            return ValueRange(1, self.max_year)
        return ValueRange(1, max(self.max_year, 1 - self.min_year))

    def range(self, fld: Union[str, ChronoField]) -> ValueRange:
        """Valid values of ``fld`` over the whole supported span."""
        f = ChronoField.of(fld)
        if f is ChronoField.YEAR:
            return ValueRange(self.min_year, self.max_year)
        if f is ChronoField.YEAR_OF_ERA:
            return self.year_of_era_range()
        if f is ChronoField.PROLEPTIC_MONTH:
            return ValueRange(self.min_year * 12, self.max_year * 12 + 11)
        if f is ChronoField.EPOCH_DAY:
            return ValueRange(
                self.converter.min_offset + self.adapter.epoch_shift,
                self.converter.max_offset + self.adapter.epoch_shift,
            )
        return f.base_range
