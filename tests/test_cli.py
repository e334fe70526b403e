# tests/test_cli.py

import pytest

from solhijri.cli import main


def test_day(capsys):
    assert main(["day", "1986-08-25"]) == 0
    assert capsys.readouterr().out.strip() == "1365-06-03"


def test_bare_date_shorthand(capsys):
    assert main(["2017-03-20"]) == 0
    assert capsys.readouterr().out.strip() == "1395-12-30"


def test_day_debug(capsys):
    assert main(["day", "2018-10-01", "--debug"]) == 0
    out = capsys.readouterr().out
    assert "(1397, 7, 9)" in out
    assert "day_of_week" in out


def test_greg(capsys):
    assert main(["greg", "1397/6/31"]) == 0
    assert capsys.readouterr().out.strip() == "2018-09-22"


def test_resolve(capsys):
    assert main(["resolve", "year=1397", "month-of-year=12", "day-of-month=30"]) == 0
    assert capsys.readouterr().out.strip() == "1397-12-29  (2019-03-20)"


def test_resolve_unresolved(capsys):
    assert main(["resolve", "year=1397"]) == 1
    assert "unresolved" in capsys.readouterr().out


def test_leap_years(capsys):
    assert main(["leap-years", "1395", "1410"]) == 0
    assert capsys.readouterr().out.strip() == "1395 1399 1403 1408"


def test_errors_become_system_exit():
    with pytest.raises(SystemExit) as ei:
        main(["greg", "1397-12-30"])
    assert "not a leap year" in str(ei.value.code)
    with pytest.raises(SystemExit):
        main(["day", "2200-01-01"])


def test_new_years(capsys):
    assert main(["new-years", "--from-year", "1398", "--to-year", "1404"]) == 0
    out = capsys.readouterr().out
    assert "2020-03-20" in out
    assert "Nowruz on March 20:" in out
    assert "(Y=1403)" in out


def test_pretty_month(capsys):
    assert main(["pretty-month", "--solar", "1397", "7"]) == 0
    out = capsys.readouterr().out
    assert "Mehr 1397" in out
    assert "09-23" in out


def test_diag_round_trip(capsys):
    assert main(["diag", "round-trip", "--N", "200"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out
