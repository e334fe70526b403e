from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import solhijri


MONTH_NAMES = (
    "Farvardin", "Ordibehesht", "Khordad", "Tir", "Mordad", "Shahrivar",
    "Mehr", "Aban", "Azar", "Dey", "Bahman", "Esfand",
)


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def weeks_of(first: date, days: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = [cell("", "") for _ in range(first.weekday())]  # Monday=0
    for top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def solar_month_calendar(Y: int, M: int) -> None:
    b = solhijri.month_bounds(Y, M)
    d0, d1 = b["first_date"], b["last_date"]

    days = []
    for row in solhijri.days_in_month(Y, M):
        d = row["date"]
        days.append((f"{row['day']:2d}", f"{d.month:02d}-{d.day:02d}"))

    title = f"{MONTH_NAMES[M - 1]} {Y}  ({b['length']} days, {d0} .. {d1})"
    print_grid(title, weeks_of(d0, days))


def gregorian_month_calendar(gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    days = []
    d = first
    while d <= last:
        s = solhijri.to_solar(d)
        days.append((f"{d.day:2d}", f"{s.month:02d}-{s.day:02d}"))
        d += timedelta(days=1)

    print_grid(f"Gregorian month  {gy}-{gm:02d}", weeks_of(first, days))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Solar Hijri month calendar and/or a Gregorian month calendar with paired labels."
    )
    p.add_argument("--solar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Solar Hijri month to print: Y M (e.g. 1403 12)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2025 3)")
    args = p.parse_args(argv)

    if not args.solar and not args.greg:
        # sensible default demo
        solar_month_calendar(1403, 12)
        gregorian_month_calendar(2025, 3)
        return 0

    if args.solar:
        Y, M = args.solar
        solar_month_calendar(Y, M)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(gy, gm)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
