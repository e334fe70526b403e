# tests/test_arithmetic.py

from datetime import date

import pytest

from solhijri.core.errors import DateOverflowError, InvalidEra, InvalidFieldValue, OutOfTableRange
from solhijri.core.types import ChronoField
from solhijri.engines.arithmetic import SOLAR_EPOCH
from solhijri.engines.iso import IsoCalendar


def test_epoch(cal):
    assert cal.adapter.epoch_shift == -492632
    assert cal.date_linear(0).to_iso() == SOLAR_EPOCH == date(621, 3, 22)
    assert cal.date(1, 1, 1).to_iso() == date(622, 3, 22)


@pytest.mark.parametrize(
    "iso, solar",
    [
        (date(1986, 8, 25), (1365, 6, 3)),
        (date(2017, 3, 20), (1395, 12, 30)),
        (date(2017, 3, 21), (1396, 1, 1)),
        (date(2019, 3, 20), (1397, 12, 29)),
        (date(2019, 3, 21), (1398, 1, 1)),
        (date(2019, 4, 21), (1398, 2, 1)),
        (date(2018, 10, 1), (1397, 7, 9)),
        (date(2018, 10, 2), (1397, 7, 10)),
        (date(1947, 3, 21), (1325, 12, 30)),
        (date(1947, 3, 22), (1326, 1, 1)),
        (date(2020, 11, 7), (1399, 8, 17)),
        (date(1981, 9, 21), (1360, 6, 30)),
        (date(1871, 9, 22), (1250, 6, 31)),
        (date(1871, 9, 23), (1250, 7, 1)),
        (date(1911, 9, 23), (1290, 6, 31)),
        (date(1911, 9, 24), (1290, 7, 1)),
        (date(2018, 10, 23), (1397, 8, 1)),
        (date(2018, 9, 22), (1397, 6, 31)),
        (date(2025, 3, 20), (1403, 12, 30)),
        (date(2021, 3, 20), (1399, 12, 30)),
        (date(2023, 9, 23), (1402, 7, 1)),
        (date(1986, 8, 22), (1365, 5, 31)),
    ],
)
def test_correspondence(cal, iso, solar):
    s = cal.from_iso(iso)
    assert s.as_tuple() == solar
    assert cal.date(*solar).to_iso() == iso


def test_day_of_week_and_epoch_day(cal):
    s = cal.date(1397, 1, 1)
    assert s.epoch_day == 17611
    assert s.day_of_week == 3
    assert cal.date(1400, 1, 1).day_of_week == 7
    assert cal.date(1397, 7, 9).day_of_week == 1


def test_plus_days(cal):
    assert cal.from_iso(date(2019, 3, 20)).plus_days(1).as_tuple() == (1398, 1, 1)
    assert cal.date(1397, 6, 31).plus_days(1).as_tuple() == (1397, 7, 1)
    assert cal.date(1399, 12, 29).plus_days(1).as_tuple() == (1399, 12, 30)
    assert cal.date(1399, 12, 30).plus_weeks(1).as_tuple() == (1400, 1, 7)
    d = cal.date(1397, 7, 10)
    assert d.plus_days(0) is d


def test_plus_months_follows_iso_clamping(cal):
    s = cal.date(1397, 11, 11)
    assert s.to_iso() == date(2019, 1, 31)
    out = s.plus_months(1)
    assert out.to_iso() == date(2019, 2, 28)
    assert out.as_tuple() == (1397, 12, 9)


def test_plus_years_follows_iso_clamping(cal):
    s = cal.date(1398, 12, 10)
    assert s.to_iso() == date(2020, 2, 29)
    out = s.plus_years(1)
    assert out.to_iso() == date(2021, 2, 28)
    assert out.as_tuple() == (1399, 12, 10)


def test_minus(cal):
    s = cal.from_iso(date(1986, 8, 25))
    assert s.minus_days(1).day == 2
    assert s.minus_months(1).month == 5
    assert s.minus_years(1).year == 1364
    assert s.minus_weeks(1).as_tuple() == (1365, 5, 27)


def test_arithmetic_leaving_the_table(cal):
    with pytest.raises(OutOfTableRange):
        cal.date(1483, 12, 30).plus_days(1)
    with pytest.raises(OutOfTableRange):
        cal.date(0, 1, 1).minus_days(1)
    with pytest.raises(OutOfTableRange):
        cal.date(1483, 12, 30).plus_years(1)


def test_with_field_day_of_month(cal):
    s = cal.date(1397, 6, 31)
    assert s.with_field(ChronoField.DAY_OF_MONTH, 1).as_tuple() == (1397, 6, 1)
    assert s.with_field("day-of-month", 31) is s
    with pytest.raises(InvalidFieldValue):
        cal.date(1397, 12, 1).with_field(ChronoField.DAY_OF_MONTH, 30)


def test_with_field_day_fields(cal):
    s = cal.date(1397, 7, 9)  # Monday
    assert s.with_field(ChronoField.DAY_OF_WEEK, 7).as_tuple() == (1397, 7, 15)
    assert s.with_field(ChronoField.DAY_OF_YEAR, 1).as_tuple() == (1397, 1, 1)
    assert s.with_field(ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH, 1).as_tuple() == (1397, 7, 8)
    assert s.with_field(ChronoField.ALIGNED_WEEK_OF_MONTH, 1).as_tuple() == (1397, 7, 2)
    assert s.with_field(ChronoField.ALIGNED_WEEK_OF_YEAR, 1).day_of_year == s.get(
        ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR
    )
    assert s.with_field(ChronoField.EPOCH_DAY, 17611).as_tuple() == (1397, 1, 1)
    with pytest.raises(InvalidFieldValue):
        s.with_field(ChronoField.DAY_OF_YEAR, 366)


def test_with_field_year_and_month_clamp(cal):
    assert cal.date(1397, 6, 31).with_field(ChronoField.MONTH_OF_YEAR, 7).as_tuple() == (1397, 7, 30)
    assert cal.date(1399, 12, 30).with_field(ChronoField.YEAR, 1400).as_tuple() == (1400, 12, 29)
    assert cal.date(1397, 6, 31).with_field(ChronoField.PROLEPTIC_MONTH, 1398 * 12).as_tuple() == (1398, 1, 31)
    assert cal.date(1397, 3, 3).with_field(ChronoField.YEAR_OF_ERA, 1300).as_tuple() == (1300, 3, 3)
    with pytest.raises(OutOfTableRange):
        cal.date(1397, 1, 1).with_field(ChronoField.YEAR, 1500)


def test_with_field_era(cal):
    s = cal.date(1, 2, 3)
    assert s.with_field(ChronoField.ERA, 1) is s
    bh = s.with_field(ChronoField.ERA, 0)
    assert bh.as_tuple() == (0, 2, 3)
    assert bh.year_of_era == 1
    assert bh.with_field(ChronoField.YEAR_OF_ERA, 1) is bh
    with pytest.raises(InvalidEra):
        s.with_field(ChronoField.ERA, 2)


def test_iso_calendar():
    iso = IsoCalendar()
    assert iso.to_epoch_day(date(1970, 1, 1)) == 0
    assert iso.from_epoch_day(17611) == date(2018, 3, 21)
    assert iso.plus_months(date(2019, 1, 31), 1) == date(2019, 2, 28)
    assert iso.plus_years(date(2020, 2, 29), 1) == date(2021, 2, 28)
    assert iso.length_of_month(date(2020, 2, 1)) == 29
    assert iso.day_of_week(date(2018, 10, 1)) == 1


def test_iso_calendar_overflow():
    iso = IsoCalendar()
    with pytest.raises(DateOverflowError):
        iso.plus_days(date(9999, 12, 31), 1)
    with pytest.raises(DateOverflowError):
        iso.from_epoch_day(10**7)
    with pytest.raises(DateOverflowError):
        iso.plus_years(date(9999, 1, 1), 1)
