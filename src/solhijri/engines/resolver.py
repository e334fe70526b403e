"""
solhijri.engines.resolver
-------------------------
Resolves a bag of date fields into one Solar Hijri date.

Resolution runs in three stages on a private copy of the input:

1. ``epoch-day`` wins outright.
2. ``proleptic-month`` and ``era``/``year-of-era`` are normalised into ``year`` and
   ``month-of-year``. A derived value that contradicts a supplied one is a DateMismatch.
3. With ``year`` known, the first rule of RULES whose fields are all present builds the
   date. If none applies the result carries no date (not enough information).

Styles:
  STRICT   validate ranges, never invent an era, reject results that leave the
           requested month or year
  SMART    validate ranges, clamp day-of-month to the month length
  LENIENT  no validation; out-of-range values carry (month 13 is month 1 of the next
           year, day 32 of a 31-day month is the 1st of the next month)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple, Union

from ..core.errors import DateMismatch
from ..core.types import ChronoField, Era, Resolution, ResolverStyle, SolarHijriDate
from .arithmetic import ArithmeticAdapter
from .civil import CivilDateConverter

logger = logging.getLogger(__name__)

F = ChronoField
FieldMap = Dict[ChronoField, int]


@dataclass(frozen=True)
class Rule:
    name: str
    fields: Tuple[ChronoField, ...]
    build: Callable[["FieldResolver", FieldMap, ResolverStyle], int]

    def applies(self, fv: FieldMap) -> bool:
        return all(f in fv for f in self.fields)


class FieldResolver:
    def __init__(
        self,
        converter: CivilDateConverter,
        adapter: ArithmeticAdapter,
        make_date: Callable[[int], SolarHijriDate],
    ):
        self.converter = converter
        self.adapter = adapter
        self.make_date = make_date

    def resolve(
        self,
        fields: Mapping[Union[str, ChronoField], int],
        style: Union[str, ResolverStyle] = ResolverStyle.SMART,
    ) -> Resolution:
        style = ResolverStyle.of(style)
        fv: FieldMap = {}
        for k, v in fields.items():
            fv[ChronoField.of(k)] = int(v)

        if F.EPOCH_DAY in fv:
            epoch_day = fv.pop(F.EPOCH_DAY)
            if style is not ResolverStyle.LENIENT:
                F.EPOCH_DAY.check(epoch_day)
            logger.debug("resolved by epoch-day %d (%s)", epoch_day, style.name)
            return Resolution(self.make_date(self.adapter.from_epoch_day(epoch_day)), fv)

        self._resolve_proleptic_month(fv, style)
        self._resolve_year_of_era(fv, style)

        if F.YEAR in fv:
            for rule in RULES:
                if rule.applies(fv):
                    offset = rule.build(self, fv, style)
                    logger.debug("resolved by rule %s (%s) -> offset %d", rule.name, style.name, offset)
                    return Resolution(self.make_date(offset), fv)

        logger.debug("no rule applies to %s", sorted(f.key for f in fv))
        return Resolution(None, fv)

    # ---------------------------------------------------------
    # Normalisation
    # ---------------------------------------------------------

    @staticmethod
    def _put_consistent(fv: FieldMap, f: ChronoField, value: int, source: ChronoField) -> None:
        old = fv.get(f)
        if old is not None and old != value:
            raise DateMismatch(
                f"Conflict found: {f.key} {old} differs from {f.key} {value} "
                f"derived from {source.key}"
            )
        fv[f] = value

    def _resolve_proleptic_month(self, fv: FieldMap, style: ResolverStyle) -> None:
        pm = fv.pop(F.PROLEPTIC_MONTH, None)
        if pm is None:
            return
        if style is not ResolverStyle.LENIENT:
            F.PROLEPTIC_MONTH.check(pm)
        year, m0 = divmod(pm, 12)
        self._put_consistent(fv, F.MONTH_OF_YEAR, m0 + 1, F.PROLEPTIC_MONTH)
        self._put_consistent(fv, F.YEAR, year, F.PROLEPTIC_MONTH)

    def _resolve_year_of_era(self, fv: FieldMap, style: ResolverStyle) -> None:
        yoe = fv.pop(F.YEAR_OF_ERA, None)
        if yoe is None:
            if F.ERA in fv:
                Era.of(fv[F.ERA])
            return
        if style is not ResolverStyle.LENIENT:
            F.YEAR_OF_ERA.check(yoe)

        era = fv.pop(F.ERA, None)
        if era is not None:
            self._put_consistent(fv, F.YEAR, proleptic_year(Era.of(era), yoe), F.YEAR_OF_ERA)
            return

        year = fv.get(F.YEAR)
        if style is ResolverStyle.STRICT:
            if year is None:
                # no era to anchor the year-of-era; leave it unresolved
                fv[F.YEAR_OF_ERA] = yoe
                return
            self._put_consistent(fv, F.YEAR, yoe if year >= 1 else 1 - yoe, F.YEAR_OF_ERA)
        else:
            self._put_consistent(
                fv, F.YEAR, yoe if year is None or year >= 1 else 1 - yoe, F.YEAR_OF_ERA
            )

    # ---------------------------------------------------------
    # Helpers shared by the rules
    # ---------------------------------------------------------

    def _year(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = fv.pop(F.YEAR)
        return y if style is ResolverStyle.LENIENT else F.YEAR.check(y)

    def _month_start(self, year: int, months: int) -> int:
        """Offset of the 1st of the month ``months`` months after Farvardin of ``year``."""
        carry, m0 = divmod(months, 12)
        return self.converter.to_linear(year + carry, m0 + 1, 1)

    def _next_or_same(self, offset: int, dow: int) -> int:
        return self.adapter.plus_days(offset, (dow - self.adapter.day_of_week(offset)) % 7)

    def _aligned_dow(self, base: int, weeks: int, dow: int, style: ResolverStyle) -> int:
        if style is ResolverStyle.LENIENT:
            weeks += (dow - 1) // 7
            dow = (dow - 1) % 7 + 1
        return self._next_or_same(self.adapter.plus_days(base, 7 * weeks), dow)

    def _strict_month(self, offset: int, year: int, month: int, style: ResolverStyle) -> int:
        if style is ResolverStyle.STRICT:
            civil = self.converter.to_civil(offset)
            if (civil.year, civil.month) != (year, month):
                raise DateMismatch(
                    "Strict mode rejected resolved date as it is in a different month: "
                    f"{civil.year}/{civil.month}/{civil.day} is not in {year}/{month}"
                )
        return offset

    def _strict_year(self, offset: int, year: int, style: ResolverStyle) -> int:
        if style is ResolverStyle.STRICT:
            civil = self.converter.to_civil(offset)
            if civil.year != year:
                raise DateMismatch(
                    "Strict mode rejected resolved date as it is in a different year: "
                    f"{civil.year}/{civil.month}/{civil.day} is not in {year}"
                )
        return offset

    # ---------------------------------------------------------
    # Rules
    # ---------------------------------------------------------

    def year_month_day(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            months = fv.pop(F.MONTH_OF_YEAR) - 1
            days = fv.pop(F.DAY_OF_MONTH) - 1
            return self.adapter.plus_days(self._month_start(y, months), days)

        moy = F.MONTH_OF_YEAR.check(fv.pop(F.MONTH_OF_YEAR))
        dom = F.DAY_OF_MONTH.check(fv.pop(F.DAY_OF_MONTH))
        if style is ResolverStyle.SMART:
            length = self.converter.length_of_month(y, moy)
            if dom > length:
                logger.debug("clamped day-of-month %d to %d in %d/%d", dom, length, y, moy)
                dom = length
        return self.converter.to_linear(y, moy, dom)

    def year_month_aligned_day(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            months = fv.pop(F.MONTH_OF_YEAR) - 1
            weeks = fv.pop(F.ALIGNED_WEEK_OF_MONTH) - 1
            days = fv.pop(F.ALIGNED_DAY_OF_WEEK_IN_MONTH) - 1
            return self.adapter.plus_days(self._month_start(y, months), 7 * weeks + days)

        moy = F.MONTH_OF_YEAR.check(fv.pop(F.MONTH_OF_YEAR))
        aw = F.ALIGNED_WEEK_OF_MONTH.check(fv.pop(F.ALIGNED_WEEK_OF_MONTH))
        ad = F.ALIGNED_DAY_OF_WEEK_IN_MONTH.check(fv.pop(F.ALIGNED_DAY_OF_WEEK_IN_MONTH))
        offset = self.adapter.plus_days(self.converter.to_linear(y, moy, 1), 7 * (aw - 1) + ad - 1)
        return self._strict_month(offset, y, moy, style)

    def year_month_week_dow(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            months = fv.pop(F.MONTH_OF_YEAR) - 1
            weeks = fv.pop(F.ALIGNED_WEEK_OF_MONTH) - 1
            dow = fv.pop(F.DAY_OF_WEEK)
            return self._aligned_dow(self._month_start(y, months), weeks, dow, style)

        moy = F.MONTH_OF_YEAR.check(fv.pop(F.MONTH_OF_YEAR))
        aw = F.ALIGNED_WEEK_OF_MONTH.check(fv.pop(F.ALIGNED_WEEK_OF_MONTH))
        dow = F.DAY_OF_WEEK.check(fv.pop(F.DAY_OF_WEEK))
        offset = self._aligned_dow(self.converter.to_linear(y, moy, 1), aw - 1, dow, style)
        return self._strict_month(offset, y, moy, style)

    def year_day(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            days = fv.pop(F.DAY_OF_YEAR) - 1
            return self.adapter.plus_days(self.converter.year_day_to_linear(y, 1), days)
        doy = F.DAY_OF_YEAR.check(fv.pop(F.DAY_OF_YEAR))
        return self.converter.year_day_to_linear(y, doy)

    def year_aligned_day(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            weeks = fv.pop(F.ALIGNED_WEEK_OF_YEAR) - 1
            days = fv.pop(F.ALIGNED_DAY_OF_WEEK_IN_YEAR) - 1
            return self.adapter.plus_days(self.converter.year_day_to_linear(y, 1), 7 * weeks + days)

        aw = F.ALIGNED_WEEK_OF_YEAR.check(fv.pop(F.ALIGNED_WEEK_OF_YEAR))
        ad = F.ALIGNED_DAY_OF_WEEK_IN_YEAR.check(fv.pop(F.ALIGNED_DAY_OF_WEEK_IN_YEAR))
        offset = self.adapter.plus_days(self.converter.year_day_to_linear(y, 1), 7 * (aw - 1) + ad - 1)
        return self._strict_year(offset, y, style)

    def year_week_dow(self, fv: FieldMap, style: ResolverStyle) -> int:
        y = self._year(fv, style)
        if style is ResolverStyle.LENIENT:
            weeks = fv.pop(F.ALIGNED_WEEK_OF_YEAR) - 1
            dow = fv.pop(F.DAY_OF_WEEK)
            return self._aligned_dow(self.converter.year_day_to_linear(y, 1), weeks, dow, style)

        aw = F.ALIGNED_WEEK_OF_YEAR.check(fv.pop(F.ALIGNED_WEEK_OF_YEAR))
        dow = F.DAY_OF_WEEK.check(fv.pop(F.DAY_OF_WEEK))
        offset = self._aligned_dow(self.converter.year_day_to_linear(y, 1), aw - 1, dow, style)
        return self._strict_year(offset, y, style)


def proleptic_year(era: Era, year_of_era: int) -> int:
    return year_of_era if era is Era.AH else 1 - year_of_era


# First match wins; every rule also needs YEAR.
RULES: Tuple[Rule, ...] = (
    Rule("year-month-day", (F.MONTH_OF_YEAR, F.DAY_OF_MONTH), FieldResolver.year_month_day),
    Rule(
        "year-month-aligned-day",
        (F.MONTH_OF_YEAR, F.ALIGNED_WEEK_OF_MONTH, F.ALIGNED_DAY_OF_WEEK_IN_MONTH),
        FieldResolver.year_month_aligned_day,
    ),
    Rule(
        "year-month-week-dow",
        (F.MONTH_OF_YEAR, F.ALIGNED_WEEK_OF_MONTH, F.DAY_OF_WEEK),
        FieldResolver.year_month_week_dow,
    ),
    Rule("year-day", (F.DAY_OF_YEAR,), FieldResolver.year_day),
    Rule(
        "year-aligned-day",
        (F.ALIGNED_WEEK_OF_YEAR, F.ALIGNED_DAY_OF_WEEK_IN_YEAR),
        FieldResolver.year_aligned_day,
    ),
    Rule("year-week-dow", (F.ALIGNED_WEEK_OF_YEAR, F.DAY_OF_WEEK), FieldResolver.year_week_dow),
)
