from __future__ import annotations

from datetime import date
import argparse

import solhijri


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian date of Nowruz (1 Farvardin) for a range of Solar Hijri years."
    )
    p.add_argument("--from-year", type=int, default=1390)
    p.add_argument("--to-year", type=int, default=1420)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="iso",
        help="Display format in the table (default: iso).",
    )
    p.add_argument(
        "--list-day",
        type=int,
        default=20,
        help="After the table, list the years whose Nowruz falls on this day of March (default: 20).",
    )
    args = p.parse_args(argv)

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Nowruz", "Leap", "Days"]
    colw = [5, 10, 4, 4]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    hits: list[tuple[date, int]] = []

    for Y in range(Y0, Y1 + 1):
        ny = solhijri.new_year_day(Y)
        d = ny["date"]
        leap = "L" if ny["leap"] else ""
        days = 366 if ny["leap"] else 365
        print("  ".join([str(Y).ljust(colw[0]), fmt(d).ljust(colw[1]), leap.ljust(colw[2]), str(days)]))
        if d.month == 3 and d.day == args.list_day:
            hits.append((d, Y))

    print(f"\nNowruz on March {args.list_day}:")
    if not hits:
        print("(none)")
        return 0

    for d, Y in hits:
        print(f"{d.isoformat()}  (Y={Y})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
