# tests/test_calendar.py

from datetime import date

import pytest

from solhijri import SolarHijriCalendar
from solhijri.core.errors import InvalidEra, InvalidFieldValue, OutOfTableRange, UnsupportedField
from solhijri.core.types import ChronoField as F
from solhijri.core.types import Era, SolarHijriDate, ValueRange
from solhijri.engines.leap_years import LeapYearTable


def test_identity(cal):
    assert cal.id == "SolarHijrah"
    assert cal.calendar_type == "Solar Hijrah"
    assert cal.eras() == (Era.BH, Era.AH)
    assert cal.era_of(1) is Era.AH
    with pytest.raises(InvalidEra):
        cal.era_of(5)


def test_construction_variants(cal):
    d = cal.date(1397, 7, 1)
    assert cal.date_era(Era.AH, 1397, 7, 1) == d
    assert cal.date_era(1, 1397, 7, 1) == d
    assert cal.date_year_day(1397, 187) == d
    assert cal.date_era_year_day(Era.AH, 1397, 187) == d
    assert cal.date_epoch_day(d.epoch_day) == d
    assert cal.date_linear(d.linear_day_offset) == d
    assert cal.from_iso(date(2018, 9, 23)) == d
    assert cal.from_tuple(d.as_tuple()) == d
    assert cal.date_era(Era.BH, 1, 1, 1).linear_day_offset == 0


def test_date_now_uses_injected_clock(cal):
    assert cal.date_now(lambda: date(2024, 3, 20)).as_tuple() == (1403, 1, 1)
    assert isinstance(cal.date_now(), SolarHijriDate)


def test_from_tuple_validates(cal):
    with pytest.raises(InvalidFieldValue):
        cal.from_tuple((1397, 12, 30))


def test_proleptic_year(cal):
    assert cal.proleptic_year(Era.AH, 1397) == 1397
    assert cal.proleptic_year(Era.BH, 1) == 0
    assert cal.proleptic_year(0, 2) == -1


def test_date_fields(cal):
    d = cal.date(1397, 6, 31)
    assert d.get(F.ERA) == 1
    assert d.get(F.YEAR_OF_ERA) == 1397
    assert d.get(F.PROLEPTIC_MONTH) == 1397 * 12 + 5
    assert d.get(F.DAY_OF_YEAR) == 186
    assert d.get(F.ALIGNED_WEEK_OF_MONTH) == 5
    assert d.get(F.ALIGNED_DAY_OF_WEEK_IN_MONTH) == 3
    assert d.get(F.ALIGNED_WEEK_OF_YEAR) == 27
    assert d.get(F.ALIGNED_DAY_OF_WEEK_IN_YEAR) == 4
    assert d.get("day-of-week") == 6
    assert d.get(F.EPOCH_DAY) == d.epoch_day == 17796
    assert set(d.fields()) == set(F)
    with pytest.raises(UnsupportedField):
        d.get("minute-of-hour")


def test_bh_era(cal):
    d = cal.date(0, 5, 5)
    assert d.era is Era.BH
    assert d.year_of_era == 1
    assert d.get(F.ERA) == 0


def test_lengths_and_leap(cal):
    assert cal.date(1399, 12, 1).length_of_month() == 30
    assert cal.date(1398, 12, 1).length_of_month() == 29
    assert cal.date(1399, 1, 1).length_of_year() == 366
    assert cal.date(1399, 1, 1).is_leap_year()
    assert not cal.date(1400, 1, 1).is_leap_year()


def test_ranges(cal):
    assert cal.range(F.YEAR) == ValueRange(0, 1483)
    assert cal.range(F.MONTH_OF_YEAR) == ValueRange(1, 12)
    assert cal.range(F.PROLEPTIC_MONTH) == ValueRange(0, 1483 * 12 + 11)
    assert cal.range(F.EPOCH_DAY) == ValueRange(-492632, 542018 - 492632)
    assert cal.year_of_era_range(Era.BH) == ValueRange(1, 1)
    assert cal.year_of_era_range(Era.AH) == ValueRange(1, 1483)

    d = cal.date(1397, 12, 5)
    assert d.range(F.DAY_OF_MONTH) == ValueRange(1, 29)
    assert d.range("day-of-year") == ValueRange(1, 365)
    assert d.range(F.YEAR_OF_ERA) == ValueRange(1, 1483)
    assert cal.date(1399, 12, 5).range(F.DAY_OF_MONTH) == ValueRange(1, 30)


def test_equality_and_ordering(cal):
    other = SolarHijriCalendar()
    a, b = cal.date(1397, 1, 1), cal.date(1397, 1, 2)
    assert a == other.date(1397, 1, 1)
    assert hash(a) == hash(other.date(1397, 1, 1))
    assert a < b
    assert sorted([b, a]) == [a, b]
    assert max(a, b) is b


def test_str_and_repr(cal):
    d = cal.date(1397, 7, 9)
    assert str(d) == "1397-07-09"
    assert repr(d) == "SolarHijriDate(1397, 7, 9)"


def test_out_of_table(cal):
    with pytest.raises(OutOfTableRange):
        cal.date(1484, 1, 1)
    with pytest.raises(OutOfTableRange):
        cal.from_iso(date(2105, 3, 21))
    with pytest.raises(OutOfTableRange):
        cal.from_iso(date(621, 3, 21))
    with pytest.raises(OutOfTableRange):
        cal.date_linear(-1)


def test_injected_table():
    # a toy table: every fourth year leaps, covering years 0..12
    cal = SolarHijriCalendar(table=LeapYearTable((4, 8, 12)))
    assert cal.range(F.YEAR) == ValueRange(0, 12)
    assert cal.date(8, 12, 30).day_of_year == 366
    assert cal.date(8, 12, 30).plus_days(1).as_tuple() == (9, 1, 1)
    with pytest.raises(OutOfTableRange):
        cal.date(13, 1, 1)
