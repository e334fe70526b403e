"""Diagnostics package.

Light-weight checks and tables printed through the CLI. leap_years needs the
diagnostics extras (numpy, matplotlib); the rest use only the standard library.
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "leap_years"]
