from __future__ import annotations

import argparse
import random
from datetime import date, timedelta

import solhijri


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def roundtrip_test(N: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    """Gregorian -> Solar Hijri -> Gregorian, and the civil triple -> date -> triple."""
    random.seed(seed)
    cal = solhijri.get_calendar()
    failures = 0

    for _ in range(N):
        d0 = random_date(start, end)
        s = solhijri.to_solar(d0)

        back = solhijri.to_gregorian(*s.as_tuple())
        again = cal.date_linear(s.linear_day_offset)
        if back != d0 or again.as_tuple() != s.as_tuple():
            failures += 1
            print("\nFAIL")
            print("d0:", d0)
            print("solar:", s)
            print("back:", back)
            print("explain:", solhijri.explain(d0))
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: gregorian -> solar hijri -> gregorian.")
    p.add_argument("--N", type=int, default=2000, help="Number of trials.")
    p.add_argument("--start", type=str, default="0621-03-22", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2105-03-20", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    start = parse_date(args.start)
    end = parse_date(args.end)

    if end < start:
        raise SystemExit("--end must be >= --start")

    failures = roundtrip_test(args.N, start, end, args.seed, max_failures=args.max_failures)
    if failures == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
