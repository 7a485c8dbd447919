"""Date generation: turns a compiled rule and a year into concrete occurrences."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from holiday_rules.services.rules import (
    EasterRelative,
    Fixed,
    FixedOnce,
    NthWeekday,
    RuleDescriptor,
    SingleDayRule,
    Span,
    WeekdayRelative,
)


@dataclass(frozen=True)
class Occurrence:
    """One concrete instance of a rule: ``[start, end)`` plus the substitution flag."""

    start: datetime
    end: datetime
    substitute: bool = False

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError("occurrence must end after it starts")


def calculate_easter_sunday(year: int) -> date:
    """Return the Gregorian Easter Sunday for *year* using the Anonymous algorithm."""

    # Anonymous Gregorian algorithm (Meeus/Jones/Butcher)
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = 1 + (h + l - 7 * m + 114) % 31
    return date(year, month, day)


def nth_weekday_of_month(year: int, month: int, weekday: int, ordinal: int) -> date | None:
    """Return the ``ordinal``-th ``weekday`` of the month, counting from the end when negative."""

    days_in_month = calendar.monthrange(year, month)[1]
    candidates = [
        date(year, month, day)
        for day in range(1, days_in_month + 1)
        if date(year, month, day).weekday() == weekday
    ]
    index = ordinal - 1 if ordinal > 0 else ordinal
    if abs(ordinal) > len(candidates):
        return None
    return candidates[index]


def weekday_relative_to(anchor: date, weekday: int, direction: str) -> date:
    """Closest ``weekday`` strictly before or after ``anchor``."""

    step = timedelta(days=-1 if direction == "before" else 1)
    current = anchor + step
    for _ in range(6):
        if current.weekday() == weekday:
            break
        current += step
    return current


def resolve_timezone(timezone: str | tzinfo | None) -> tzinfo | None:
    """Turn an IANA name into a ``ZoneInfo``; tzinfo objects and ``None`` pass through."""

    if timezone is None or isinstance(timezone, tzinfo):
        return timezone
    return ZoneInfo(timezone)


def localize(day: date, timezone: str | tzinfo | None = None) -> datetime:
    """Local midnight of ``day``; naive when no timezone is given."""

    return datetime.combine(day, time(), tzinfo=resolve_timezone(timezone))


def _dates_for(descriptor: SingleDayRule, year: int) -> list[date]:
    if isinstance(descriptor, Fixed):
        if descriptor.month == 2 and descriptor.day == 29 and not calendar.isleap(year):
            return []
        return [date(year, descriptor.month, descriptor.day)]
    if isinstance(descriptor, FixedOnce):
        if descriptor.year != year:
            return []
        return [date(descriptor.year, descriptor.month, descriptor.day)]
    if isinstance(descriptor, NthWeekday):
        found = nth_weekday_of_month(year, descriptor.month, descriptor.weekday, descriptor.ordinal)
        return [found] if found is not None else []
    if isinstance(descriptor, WeekdayRelative):
        if not _has_day(year, descriptor.anchor_month, descriptor.anchor_day):
            return []
        anchor = date(year, descriptor.anchor_month, descriptor.anchor_day)
        return [weekday_relative_to(anchor, descriptor.weekday, descriptor.direction)]
    if isinstance(descriptor, EasterRelative):
        return [calculate_easter_sunday(year) + timedelta(days=descriptor.day_offset)]
    raise TypeError(f"Unsupported rule descriptor: {descriptor!r}")


def _has_day(year: int, month: int, day: int) -> bool:
    return day <= calendar.monthrange(year, month)[1]


def evaluate(
    descriptor: RuleDescriptor,
    year: int,
    timezone: str | tzinfo | None = None,
) -> list[Occurrence]:
    """Evaluate ``descriptor`` for ``year``.

    Results may fall into the adjacent calendar year (spans, ``before``/``after``
    rules anchored near New Year) and are not clamped. An occurrence that
    would leave the supported date range yields no result.
    """

    tz = resolve_timezone(timezone)
    if isinstance(descriptor, Span):
        base, length_days = descriptor.base, descriptor.length_days
    else:
        base, length_days = descriptor, 1

    try:
        return [
            Occurrence(start=localize(day, tz), end=localize(day + timedelta(days=length_days), tz))
            for day in _dates_for(base, year)
        ]
    except OverflowError:
        return []
