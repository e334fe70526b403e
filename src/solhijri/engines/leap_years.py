"""
solhijri.engines.leap_years
---------------------------
Table of Solar Hijri leap years.

Leap years come roughly every four years, but in cycles of 29, 33 and 37 years one
quadrennium stretches to five years (the first such case is year 9, which follows 4
instead of 8). The placement follows the observed vernal equinox and is therefore
tabulated rather than computed.

The table is read once per process. Set SOLHIJRI_LEAP_TABLE to the path of a CSV file
with a ``year`` column to replace the built-in list.
"""

from __future__ import annotations

import csv
import logging
import os
import threading
from bisect import bisect_left
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..core.errors import OutOfTableRange

logger = logging.getLogger(__name__)

ENV_VAR = "SOLHIJRI_LEAP_TABLE"

# Year 0 (1 BH) opens the day count; it is a common year by construction of the epoch.
FIRST_YEAR = 0

LEAP_YEARS: Tuple[int, ...] = (
    4, 9, 13, 17, 21, 25, 29, 33, 37, 42, 46, 50, 54, 58, 62, 66, 71, 75, 79, 83, 87, 91, 95, 99,
    104, 108, 112, 116, 120, 124, 128, 132, 137, 141, 145, 149, 153, 157, 161, 165, 170, 174, 178,
    182, 186, 190, 194, 198, 203, 207, 211, 215, 219, 223, 227, 231, 236, 240, 244, 248, 252, 256,
    260, 264, 269, 273, 277, 281, 285, 289, 293, 297, 302, 306, 310, 314, 318, 322, 326, 331, 335,
    339, 343, 347, 351, 355, 359, 364, 368, 372, 376, 380, 384, 388, 392, 397, 401, 405, 409, 413,
    417, 421, 425, 430, 434, 438, 442, 446, 450, 454, 458, 463, 467, 471, 475, 479, 483, 487, 491,
    496, 500, 504, 508, 512, 516, 520, 524, 529, 533, 537, 541, 545, 549, 553, 558, 562, 566, 570,
    574, 578, 582, 586, 591, 595, 599, 603, 607, 611, 615, 619, 624, 628, 632, 636, 640, 644, 648,
    652, 656, 661, 665, 669, 673, 677, 681, 685, 690, 694, 698, 702, 706, 710, 714, 718, 723, 727,
    731, 735, 739, 743, 747, 751, 756, 760, 764, 768, 772, 776, 780, 784, 789, 793, 797, 801, 805,
    809, 813, 817, 822, 826, 830, 834, 838, 842, 846, 850, 855, 859, 863, 867, 871, 875, 879, 883,
    888, 892, 896, 900, 904, 908, 912, 916, 921, 925, 929, 933, 937, 941, 945, 949, 954, 958, 962,
    966, 970, 974, 978, 983, 987, 991, 995, 999, 1003, 1007, 1011, 1016, 1020, 1024, 1028, 1032,
    1036, 1040, 1044, 1049, 1053, 1057, 1061, 1065, 1069, 1073, 1077, 1082, 1086, 1090, 1094, 1098,
    1102, 1106, 1110, 1115, 1119, 1123, 1127, 1131, 1135, 1139, 1143, 1148, 1152, 1156, 1160, 1164,
    1168, 1172, 1176, 1181, 1185, 1189, 1193, 1197, 1201, 1205, 1209, 1214, 1218, 1222, 1226, 1230,
    1234, 1238, 1243, 1247, 1251, 1255, 1259, 1263, 1267, 1271, 1275, 1280, 1284, 1288, 1292, 1296,
    1300, 1304, 1308, 1313, 1317, 1321, 1325, 1329, 1333, 1337, 1341, 1346, 1350, 1354, 1358, 1362,
    1366, 1370, 1375, 1379, 1383, 1387, 1391, 1395, 1399, 1403, 1408, 1412, 1416, 1420, 1424, 1428,
    1432, 1436, 1441, 1445, 1449, 1453, 1457, 1461, 1465, 1469, 1473, 1478, 1483,
)


@dataclass(frozen=True)
class LeapYearTable:
    """
    Sorted, duplicate-free leap years with the inclusive span of years they describe.
    Implements the LeapRule protocol.
    """
    years: Tuple[int, ...]
    first_year: int = FIRST_YEAR
    last_year: Optional[int] = None

    def __post_init__(self) -> None:
        ys = tuple(sorted(set(self.years)))
        if not ys:
            raise ValueError("leap-year table is empty")
        object.__setattr__(self, "years", ys)
        if self.last_year is None:
            object.__setattr__(self, "last_year", ys[-1])
        if ys[0] < self.first_year or ys[-1] > self.last_year:
            raise ValueError(f"leap years must lie within [{self.first_year}, {self.last_year}]")

    @classmethod
    def from_years(cls, years: Iterable[int]) -> "LeapYearTable":
        return cls(tuple(int(y) for y in years))

    @property
    def span(self) -> Tuple[int, int]:
        return (self.first_year, self.last_year)

    def __len__(self) -> int:
        return len(self.years)

    def __contains__(self, year: object) -> bool:
        if not isinstance(year, int):
            return False
        i = bisect_left(self.years, year)
        return i < len(self.years) and self.years[i] == year

    def check_year(self, year: int) -> int:
        if not (self.first_year <= year <= self.last_year):
            raise OutOfTableRange(
                f"Year {year} is outside the leap-year table [{self.first_year}, {self.last_year}]",
                value=year,
                span=self.span,
            )
        return year

    def is_leap_year(self, year: int) -> bool:
        return self.check_year(year) in self

    def leap_years_before(self, year: int) -> int:
        """Count of leap years <= year - 1. Defined up to last_year + 1."""
        if year <= self.first_year:
            return 0
        if year > self.last_year + 1:
            raise OutOfTableRange(
                f"Cannot count leap years before {year}: table ends at {self.last_year}",
                value=year,
                span=self.span,
            )
        return bisect_left(self.years, year)

    def leap_years_between(self, start: int, end: int) -> Tuple[int, ...]:
        """Leap years in [start, end], clipped to the table."""
        lo = bisect_left(self.years, start)
        hi = bisect_left(self.years, end + 1)
        return self.years[lo:hi]


def _read_csv_years(path: Path) -> LeapYearTable:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or "year" not in reader.fieldnames:
            raise ValueError(f"{path}: expected a 'year' column")
        return LeapYearTable.from_years(int(r["year"]) for r in reader if r["year"].strip())


def load_leap_year_table(path: Optional[str] = None) -> LeapYearTable:
    """
    Build a leap-year table.

    Search order:
      1) ``path`` argument, then the SOLHIJRI_LEAP_TABLE environment variable
      2) the built-in LEAP_YEARS tuple
    """
    p = path if path is not None else os.environ.get(ENV_VAR, "").strip()
    if p:
        source = Path(p).expanduser()
        try:
            table = _read_csv_years(source)
        except (OSError, ValueError, KeyError) as e:
            logger.warning("Ignoring leap-year table %s (%s); using built-in table", source, e)
        else:
            logger.debug("Loaded %d leap years from %s, span %s", len(table), source, table.span)
            return table

    table = LeapYearTable(LEAP_YEARS)
    logger.debug("Using built-in leap-year table: %d leap years, span %s", len(table), table.span)
    return table


_table: Optional[LeapYearTable] = None
_table_lock = threading.Lock()


def leap_year_table() -> LeapYearTable:
    """Process-wide table, built on first use and shared by every caller."""
    global _table
    table = _table
    if table is None:
        with _table_lock:
            if _table is None:
                _table = load_leap_year_table()
            table = _table
    return table
