from __future__ import annotations

import argparse
from datetime import date
import logging
import sys
import re
import importlib
import inspect

from .core.errors import SolhijriError


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_solar(s: str) -> tuple[int, int, int]:
    y, m, d = map(int, s.replace("/", "-").split("-"))
    return y, m, d


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import solhijri

    p = argparse.ArgumentParser(prog="solhijri day", description="Gregorian -> Solar Hijri date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--debug", action="store_true", help="print the full decomposition")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    if args.debug:
        for k, v in solhijri.explain(d).items():
            print(f"{k:18s} {v}")
    else:
        print(solhijri.to_solar(d))
    return 0


def cmd_greg(argv: list[str]) -> int:
    import solhijri

    p = argparse.ArgumentParser(prog="solhijri greg", description="Solar Hijri -> Gregorian date")
    p.add_argument("date", help="Y-M-D or Y/M/D in the Solar Hijri calendar")
    args = p.parse_args(argv)

    print(solhijri.to_gregorian(*_parse_solar(args.date)).isoformat())
    return 0


def cmd_resolve(argv: list[str]) -> int:
    import solhijri

    p = argparse.ArgumentParser(
        prog="solhijri resolve",
        description="Resolve date fields, e.g. year=1397 month-of-year=6 day-of-month=31",
    )
    p.add_argument("fields", nargs="+", help="field=value (field keys as in ChronoField, e.g. day-of-year)")
    p.add_argument("--style", choices=("strict", "smart", "lenient"), default="smart")
    args = p.parse_args(argv)

    fields = {}
    for item in args.fields:
        if "=" not in item:
            raise SystemExit(f"Expected field=value, got {item!r}")
        k, v = item.split("=", 1)
        fields[k.strip()] = int(v)

    d = solhijri.from_fields(fields, args.style)
    if d is None:
        print("(unresolved: not enough fields to locate a day)")
        return 1
    print(f"{d}  ({d.to_iso().isoformat()})")
    return 0


def cmd_leap_years(argv: list[str]) -> int:
    import solhijri

    p = argparse.ArgumentParser(prog="solhijri leap-years", description="List Solar Hijri leap years")
    p.add_argument("start", type=int)
    p.add_argument("end", type=int)
    args = p.parse_args(argv)

    print(" ".join(str(y) for y in solhijri.leap_years(args.start, args.end)))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `solhijri YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = argparse.ArgumentParser(prog="solhijri", description="Solar Hijri calendar toolkit CLI.")
    p.add_argument("--log-level", choices=_LOG_LEVELS, default="WARNING")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> Solar Hijri date")
    sub.add_parser("greg", help="Solar Hijri -> Gregorian date")
    sub.add_parser("resolve", help="Resolve a set of date fields")
    sub.add_parser("leap-years", help="List leap years in a range")

    # diagnostics
    sub.add_parser("pretty-month", help="Print Solar Hijri/Gregorian month calendars (diagnostics)")
    sub.add_parser("new-years", help="Print Nowruz table (diagnostics)")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["leap-gaps", "round-trip"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "day": cmd_day,
        "greg": cmd_greg,
        "resolve": cmd_resolve,
        "leap-years": cmd_leap_years,
    }
    modules = {
        "pretty-month": "solhijri.diagnostics.pretty_month",
        "new-years": "solhijri.diagnostics.new_years_table",
    }
    diag_map = {
        "leap-gaps": "solhijri.diagnostics.leap_years",
        "round-trip": "solhijri.diagnostics.round_trip",
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd in modules:
            return _run_module_main(modules[args.cmd], rest)
        if args.cmd == "diag":
            return _run_module_main(diag_map[args.tool], rest)
    except SolhijriError as e:
        raise SystemExit(f"error: {e}") from e

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
