# tests/test_leap_years.py

import threading

import pytest

from solhijri.core.errors import OutOfTableRange
from solhijri.engines.leap_years import (
    ENV_VAR,
    LEAP_YEARS,
    LeapYearTable,
    leap_year_table,
    load_leap_year_table,
)


def test_builtin_table_shape():
    t = LeapYearTable(LEAP_YEARS)
    assert len(t) == 359
    assert t.span == (0, 1483)
    assert t.years[0] == 4 and t.years[-1] == 1483
    assert list(t.years).count(1181) == 1


def test_is_leap_year():
    t = LeapYearTable(LEAP_YEARS)
    for y in (4, 9, 1395, 1399, 1403, 1408, 1483):
        assert t.is_leap_year(y)
    for y in (0, 1, 8, 1397, 1398, 1400, 1404):
        assert not t.is_leap_year(y)


def test_gaps_are_four_or_five():
    ys = LEAP_YEARS
    gaps = {b - a for a, b in zip(ys, ys[1:])}
    assert gaps == {4, 5}
    # the first five-year gap follows year 4
    assert ys[:3] == (4, 9, 13)


def test_leap_years_before():
    t = LeapYearTable(LEAP_YEARS)
    assert t.leap_years_before(0) == 0
    assert t.leap_years_before(4) == 0
    assert t.leap_years_before(5) == 1
    assert t.leap_years_before(1484) == 359
    for y in range(0, 1485, 37):
        assert t.leap_years_before(y) == sum(1 for x in LEAP_YEARS if x <= y - 1)


def test_out_of_table():
    t = LeapYearTable(LEAP_YEARS)
    with pytest.raises(OutOfTableRange) as ei:
        t.is_leap_year(1484)
    assert ei.value.span == (0, 1483)
    with pytest.raises(OutOfTableRange):
        t.is_leap_year(-1)
    with pytest.raises(OutOfTableRange):
        t.leap_years_before(1485)


def test_membership_never_raises():
    t = LeapYearTable(LEAP_YEARS)
    assert 1399 in t
    assert 99999 not in t
    assert "1399" not in t


def test_table_normalises_input():
    t = LeapYearTable((9, 4, 4, 13))
    assert t.years == (4, 9, 13)
    assert t.span == (0, 13)
    with pytest.raises(ValueError):
        LeapYearTable(())


def test_leap_years_between():
    t = LeapYearTable(LEAP_YEARS)
    assert t.leap_years_between(1395, 1410) == (1395, 1399, 1403, 1408)


def test_env_override(tmp_path, monkeypatch, fresh_table):
    p = tmp_path / "leaps.csv"
    p.write_text("year\n4\n8\n12\n", encoding="utf-8")
    monkeypatch.setenv(ENV_VAR, str(p))

    t = load_leap_year_table()
    assert t.years == (4, 8, 12)
    assert t.span == (0, 12)


def test_bad_override_falls_back(tmp_path, monkeypatch, caplog, fresh_table):
    p = tmp_path / "leaps.csv"
    p.write_text("yr\n4\n", encoding="utf-8")
    monkeypatch.setenv(ENV_VAR, str(p))

    with caplog.at_level("WARNING", logger="solhijri.engines.leap_years"):
        t = load_leap_year_table()
    assert len(t) == 359
    assert "Ignoring leap-year table" in caplog.text


def test_missing_override_falls_back(tmp_path, fresh_table):
    t = load_leap_year_table(str(tmp_path / "nope.csv"))
    assert t.years == LEAP_YEARS


def test_singleton_under_concurrent_first_access(fresh_table):
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(leap_year_table())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert len(seen) == 8
    assert all(t is seen[0] for t in seen)
    assert leap_year_table() is seen[0]
