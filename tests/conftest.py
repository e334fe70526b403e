# tests/conftest.py

import pytest

import solhijri
from solhijri.engines import leap_years


@pytest.fixture
def cal():
    return solhijri.get_calendar()


@pytest.fixture
def fresh_table(monkeypatch):
    """Forget the process-wide leap-year table for the duration of a test."""
    monkeypatch.setattr(leap_years, "_table", None)
    monkeypatch.delenv(leap_years.ENV_VAR, raising=False)
    return leap_years
