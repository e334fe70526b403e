#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import solhijri


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "solhijri[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "solhijri[diagnostics]"') from e


def gap_stats(np, years: List[int], start_year: int, end_year: int) -> dict:
    """Spacing of consecutive leap years and the mean year length over [start_year, end_year]."""
    ys = np.asarray(years, dtype=int)
    gaps = np.diff(ys)
    values, counts = np.unique(gaps, return_counts=True)
    n_years = end_year - start_year + 1
    return {
        "leap_years": int(ys.size),
        "years": n_years,
        "gaps": {int(v): int(c) for v, c in zip(values, counts)},
        "five_year_gaps_after": [int(y) for y in ys[:-1][gaps == 5]],
        "mean_year_days": 365.0 + ys.size / n_years,
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Leap-year spacing statistics, with an optional barcode plot."
    )
    p.add_argument("--start-year", type=int, default=1)
    p.add_argument("--end-year", type=int, default=1483)
    p.add_argument("--plot", action="store_true", help="Save a barcode plot of leap years.")
    p.add_argument("--out", default="leap_years_barcode.png")
    p.add_argument("--title", default="Solar Hijri leap years")
    args = p.parse_args(argv)

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    np = _need_numpy()
    years = solhijri.leap_years(start_year, end_year)
    if len(years) < 2:
        raise SystemExit("Need at least two leap years in range")

    st = gap_stats(np, years, start_year, end_year)
    print(f"Years {start_year}..{end_year}: {st['leap_years']} leap years in {st['years']}")
    print(f"Mean year length: {st['mean_year_days']:.6f} days")
    print("Gaps between consecutive leap years:")
    for gap, count in sorted(st["gaps"].items()):
        print(f"  {gap} years: {count}")
    print("Five-year gaps start after:", " ".join(str(y) for y in st["five_year_gaps_after"]))

    if not args.plot:
        return 0

    plt = _need_matplotlib()
    fig, ax = plt.subplots(figsize=(16, 2.4))
    ax.vlines(np.asarray(years), 0, 1, colors="0.15", linewidth=0.8)
    five = np.asarray(st["five_year_gaps_after"], dtype=int)
    if five.size:
        ax.vlines(five + 5, 0, 1, colors="tab:red", linewidth=1.4, label="after a 5-year gap")
        ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_yticks([])
    ax.tick_params(axis="x", length=0)
    ax.set_xlabel("Solar Hijri year")
    ax.set_title(args.title)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
