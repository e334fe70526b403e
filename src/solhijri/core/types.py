from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Dict, NamedTuple, Optional, Tuple, Union

from .errors import InvalidEra, InvalidFieldValue, UnsupportedField

if TYPE_CHECKING:
    from ..engines.calendar import SolarHijriCalendar


class Era(IntEnum):
    """BH (before Hijrah) for proleptic years <= 0, AH for years >= 1."""
    BH = 0
    AH = 1

    @classmethod
    def of(cls, value: int) -> "Era":
        try:
            return cls(value)
        except ValueError:
            raise InvalidEra(f"Invalid value for era: {value}", value=value) from None


class ResolverStyle(Enum):
    STRICT = "strict"
    SMART = "smart"
    LENIENT = "lenient"

    @classmethod
    def of(cls, style: Union[str, "ResolverStyle"]) -> "ResolverStyle":
        if isinstance(style, ResolverStyle):
            return style
        return cls(str(style).strip().lower())


@dataclass(frozen=True)
class ValueRange:
    minimum: int
    maximum: int

    def is_valid(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check(self, value: int, fld: Any = None) -> int:
        if not self.is_valid(value):
            name = fld.key if isinstance(fld, ChronoField) else fld
            raise InvalidFieldValue(
                f"Invalid value for {name} (valid values {self.minimum} - {self.maximum}): {value}",
                field=fld,
                value=value,
            )
        return int(value)


class ChronoField(Enum):
    """Date fields understood by the calendar, with their calendar-wide ranges."""
    ERA = ("era", 0, 1)
    YEAR = ("year", -999_999, 999_999)
    YEAR_OF_ERA = ("year-of-era", 1, 1_000_000)
    PROLEPTIC_MONTH = ("proleptic-month", -999_999 * 12, 999_999 * 12 + 11)
    MONTH_OF_YEAR = ("month-of-year", 1, 12)
    DAY_OF_MONTH = ("day-of-month", 1, 31)
    DAY_OF_YEAR = ("day-of-year", 1, 366)
    ALIGNED_WEEK_OF_MONTH = ("aligned-week-of-month", 1, 5)
    ALIGNED_DAY_OF_WEEK_IN_MONTH = ("aligned-day-of-week-in-month", 1, 7)
    ALIGNED_WEEK_OF_YEAR = ("aligned-week-of-year", 1, 53)
    ALIGNED_DAY_OF_WEEK_IN_YEAR = ("aligned-day-of-week-in-year", 1, 7)
    DAY_OF_WEEK = ("day-of-week", 1, 7)
    EPOCH_DAY = ("epoch-day", -365_243_219_162, 365_241_780_471)

    def __init__(self, key: str, minimum: int, maximum: int):
        self.key = key
        self.base_range = ValueRange(minimum, maximum)

    def check(self, value: int) -> int:
        return self.base_range.check(value, self)

    @classmethod
    def of(cls, name: Union[str, "ChronoField"]) -> "ChronoField":
        """Accepts a member, a member name (``DAY_OF_MONTH``) or a key (``day-of-month``)."""
        if isinstance(name, ChronoField):
            return name
        if isinstance(name, str):
            key = name.strip().lower().replace("_", "-")
            for f in cls:
                if f.key == key:
                    return f
        raise UnsupportedField(f"Unsupported field: {name!r}")

    def __repr__(self) -> str:
        return f"ChronoField.{self.name}"


class CivilFields(NamedTuple):
    year: int
    month: int
    day: int
    day_of_year: int


@dataclass(frozen=True, order=True)
class SolarHijriDate:
    """
    A date in the Solar Hijri calendar.

    The linear day offset is the only stored state; every civil field is derived
    from it on demand. Equality and ordering compare offsets only.
    """
    offset: int
    calendar: "SolarHijriCalendar" = field(compare=False, repr=False)

    @cached_property
    def _civil(self) -> CivilFields:
        return self.calendar.converter.to_civil(self.offset)

    # ---------------------------------------------------------
    # Field access
    # ---------------------------------------------------------

    @property
    def year(self) -> int:
        return self._civil.year

    @property
    def month(self) -> int:
        return self._civil.month

    @property
    def day(self) -> int:
        return self._civil.day

    @property
    def day_of_year(self) -> int:
        return self._civil.day_of_year

    @property
    def linear_day_offset(self) -> int:
        return self.offset

    @property
    def era(self) -> Era:
        return Era.AH if self.year >= 1 else Era.BH

    @property
    def year_of_era(self) -> int:
        return self.year if self.year >= 1 else 1 - self.year

    @property
    def proleptic_month(self) -> int:
        return self.year * 12 + self.month - 1

    @property
    def epoch_day(self) -> int:
        return self.calendar.adapter.epoch_day(self.offset)

    @property
    def day_of_week(self) -> int:
        return self.calendar.adapter.day_of_week(self.offset)

    def get(self, fld: Union[str, ChronoField]) -> int:
        f = ChronoField.of(fld)
        if f is ChronoField.ERA:
            return int(self.era)
        if f is ChronoField.YEAR:
            return self.year
        if f is ChronoField.YEAR_OF_ERA:
            return self.year_of_era
        if f is ChronoField.PROLEPTIC_MONTH:
            return self.proleptic_month
        if f is ChronoField.MONTH_OF_YEAR:
            return self.month
        if f is ChronoField.DAY_OF_MONTH:
            return self.day
        if f is ChronoField.DAY_OF_YEAR:
            return self.day_of_year
        if f is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return (self.day - 1) // 7 + 1
        if f is ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (self.day - 1) % 7 + 1
        if f is ChronoField.ALIGNED_WEEK_OF_YEAR:
            return (self.day_of_year - 1) // 7 + 1
        if f is ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR:
            return (self.day_of_year - 1) % 7 + 1
        if f is ChronoField.DAY_OF_WEEK:
            return self.day_of_week
        return self.epoch_day

    def fields(self) -> Dict[ChronoField, int]:
        return {f: self.get(f) for f in ChronoField}

    def range(self, fld: Union[str, ChronoField]) -> ValueRange:
        """Valid values of ``fld`` refined by this date's year and month."""
        f = ChronoField.of(fld)
        if f is ChronoField.DAY_OF_MONTH:
            return ValueRange(1, self.length_of_month())
        if f is ChronoField.DAY_OF_YEAR:
            return ValueRange(1, self.length_of_year())
        if f is ChronoField.YEAR_OF_ERA:
            return self.calendar.year_of_era_range(self.era)
        return self.calendar.range(f)

    def length_of_month(self) -> int:
        return self.calendar.converter.length_of_month(self.year, self.month)

    def length_of_year(self) -> int:
        return self.calendar.converter.length_of_year(self.year)

    def is_leap_year(self) -> bool:
        return self.calendar.is_leap_year(self.year)

    # ---------------------------------------------------------
    # New-value arithmetic
    # ---------------------------------------------------------

    def _at(self, offset: int) -> "SolarHijriDate":
        return self if offset == self.offset else SolarHijriDate(offset, self.calendar)

    def plus_days(self, days: int) -> "SolarHijriDate":
        return self._at(self.calendar.adapter.plus_days(self.offset, days))

    def plus_weeks(self, weeks: int) -> "SolarHijriDate":
        return self._at(self.calendar.adapter.plus_days(self.offset, 7 * weeks))

    def plus_months(self, months: int) -> "SolarHijriDate":
        return self._at(self.calendar.adapter.plus_months(self.offset, months))

    def plus_years(self, years: int) -> "SolarHijriDate":
        return self._at(self.calendar.adapter.plus_years(self.offset, years))

    def minus_days(self, days: int) -> "SolarHijriDate":
        return self.plus_days(-days)

    def minus_weeks(self, weeks: int) -> "SolarHijriDate":
        return self.plus_weeks(-weeks)

    def minus_months(self, months: int) -> "SolarHijriDate":
        return self.plus_months(-months)

    def minus_years(self, years: int) -> "SolarHijriDate":
        return self.plus_years(-years)

    def with_field(self, fld: Union[str, ChronoField], value: int) -> "SolarHijriDate":
        return self._at(self.calendar.adapter.with_field(self.offset, ChronoField.of(fld), value))

    # ---------------------------------------------------------
    # Conversions
    # ---------------------------------------------------------

    def to_iso(self) -> date:
        return self.calendar.adapter.to_underlying(self.offset)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __repr__(self) -> str:
        return f"SolarHijriDate({self.year}, {self.month}, {self.day})"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of field resolution.

    ``date`` is None when the supplied fields do not locate a day; ``remaining`` holds
    the fields the resolver did not consume.
    """
    date: Optional[SolarHijriDate]
    remaining: Dict[ChronoField, int] = field(default_factory=dict)

    @property
    def resolved(self) -> bool:
        return self.date is not None
