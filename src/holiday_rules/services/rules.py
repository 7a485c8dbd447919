"""Rule grammar: compiles holiday rule strings into typed descriptors."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Literal, Union

WEEKDAYS: dict[str, int] = {
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tuesday": 1,
    "wed": 2,
    "wednesday": 2,
    "thu": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
    "sun": 6,
    "sunday": 6,
}

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
MONTHS: dict[str, int] = {}
for _number, _name in enumerate(_MONTH_NAMES, start=1):
    MONTHS[_name] = _number
    MONTHS[_name[:3]] = _number

MAX_ORDINAL = 5
# Upper bound for Easter offsets and span lengths, in days.
MAX_DAYS = 366

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


@dataclass(frozen=True)
class Fixed:
    month: int
    day: int


@dataclass(frozen=True)
class FixedOnce:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class NthWeekday:
    ordinal: int
    weekday: int
    month: int


@dataclass(frozen=True)
class WeekdayRelative:
    weekday: int
    anchor_month: int
    anchor_day: int
    direction: Literal["before", "after"]


@dataclass(frozen=True)
class EasterRelative:
    day_offset: int = 0


@dataclass(frozen=True)
class Span:
    base: "SingleDayRule"
    length_days: int


SingleDayRule = Union[Fixed, FixedOnce, NthWeekday, WeekdayRelative, EasterRelative]
RuleDescriptor = Union[SingleDayRule, Span]

_SPAN_RE = re.compile(r"^(?P<body>.+?)\s+(?P<days>\d+)d$")
_FIXED_RE = re.compile(r"^(?P<month>\d{1,2})-(?P<day>\d{1,2})$")
_FIXED_ONCE_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})$")
_NTH_RE = re.compile(
    r"^(?P<ordinal>last|[+-]?\d+)(?P<suffix>st|nd|rd|th)?\s+(?P<weekday>[a-z]+)\s+in\s+(?P<month>[a-z]+)$"
)
_RELATIVE_RE = re.compile(
    r"^(?P<weekday>[a-z]+)\s+(?P<direction>before|after)\s+(?P<month>\d{1,2})-(?P<day>\d{1,2})$"
)
_EASTER_RE = re.compile(r"^easter(?:\s+(?P<offset>[+-]?\d+))?$")


def _valid_month_day(month: int, day: int) -> bool:
    if not 1 <= month <= 12:
        return False
    # Feb 29 is a valid annual rule; it simply has no occurrence in common years.
    return 1 <= day <= calendar.monthrange(2000, month)[1]


def _parse_ordinal(token: str, suffix: str | None) -> int | None:
    if token == "last":
        return -1 if suffix is None else None
    ordinal = int(token)
    if ordinal == 0 or abs(ordinal) > MAX_ORDINAL:
        return None
    # "1st", "2nd", "3rd", "4th", "-1st"; a bare number needs no suffix.
    if suffix is not None and suffix != _ORDINAL_SUFFIXES.get(abs(ordinal), "th"):
        return None
    return ordinal


def _parse_single(text: str) -> SingleDayRule | None:
    match = _FIXED_RE.match(text)
    if match:
        month, day = int(match["month"]), int(match["day"])
        return Fixed(month, day) if _valid_month_day(month, day) else None

    match = _FIXED_ONCE_RE.match(text)
    if match:
        year, month, day = int(match["year"]), int(match["month"]), int(match["day"])
        try:
            date(year, month, day)
        except ValueError:
            return None
        return FixedOnce(year, month, day)

    match = _NTH_RE.match(text)
    if match:
        ordinal = _parse_ordinal(match["ordinal"], match["suffix"])
        weekday = WEEKDAYS.get(match["weekday"])
        month = MONTHS.get(match["month"])
        if ordinal is None or weekday is None or month is None:
            return None
        return NthWeekday(ordinal, weekday, month)

    match = _RELATIVE_RE.match(text)
    if match:
        weekday = WEEKDAYS.get(match["weekday"])
        month, day = int(match["month"]), int(match["day"])
        if weekday is None or not _valid_month_day(month, day):
            return None
        return WeekdayRelative(weekday, month, day, match["direction"])

    match = _EASTER_RE.match(text)
    if match:
        offset = int(match["offset"] or 0)
        return EasterRelative(offset) if abs(offset) <= MAX_DAYS else None

    return None


def parse_rule(rule: str) -> tuple[RuleDescriptor | None, bool]:
    """Compile ``rule`` into a descriptor.

    Returns ``(descriptor, True)`` on success and ``(None, False)`` for any
    string outside the grammar. Never raises for malformed input.
    """

    if not isinstance(rule, str):
        return None, False
    text = " ".join(rule.strip().lower().split())
    if not text:
        return None, False

    length_days = None
    match = _SPAN_RE.match(text)
    if match:
        text, length_days = match["body"], int(match["days"])
        if not 1 <= length_days <= MAX_DAYS:
            return None, False

    descriptor = _parse_single(text)
    if descriptor is None:
        return None, False
    if length_days is not None:
        return Span(descriptor, length_days), True
    return descriptor, True


def span_length(descriptor: RuleDescriptor) -> int:
    """Number of days a single occurrence of ``descriptor`` covers."""

    return descriptor.length_days if isinstance(descriptor, Span) else 1
