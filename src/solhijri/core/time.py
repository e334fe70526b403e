from __future__ import annotations
from datetime import date

# Julian Day Number of 1970-01-01, the origin of ISO epoch days.
JDN_UNIX_EPOCH = 2440588


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)


def to_epoch_day(d: date) -> int:
    """Days since 1970-01-01."""
    return to_jdn(d) - JDN_UNIX_EPOCH


def from_epoch_day(epoch_day: int) -> date:
    return from_jdn(epoch_day + JDN_UNIX_EPOCH)
