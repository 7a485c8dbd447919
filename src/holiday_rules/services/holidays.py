"""Holiday lists per year, point queries and the per-locale session object."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Literal

from holiday_rules.core.config import HOLIDAY_TYPES, Settings, get_settings
from holiday_rules.schemas.holiday import HolidayOptions, HolidayRead, LocaleData
from holiday_rules.services.dates import Occurrence, evaluate, localize, resolve_timezone
from holiday_rules.services.registry import HolidayRegistry
from holiday_rules.services.rules import RuleDescriptor, span_length
from holiday_rules.services.translate import language_chain, translate_name

DEFAULT_NON_WORKING_DAYS: frozenset[int] = frozenset({5, 6})


def to_year(value: int | str | date | None, timezone: str | tzinfo | None = None) -> int:
    """Normalize a year, an ISO date string or a date/datetime to its calendar year."""

    if value is None:
        return _now(timezone).year
    if isinstance(value, datetime):
        return _as_instant(value, timezone).year
    if isinstance(value, date):
        return value.year
    if isinstance(value, str):
        value = value.strip()
        if len(value) == 4 and value.isdigit():
            return int(value)
        return date.fromisoformat(value[:10]).year
    return int(value)


def _now(timezone: str | tzinfo | None) -> datetime:
    tz = resolve_timezone(timezone)
    return datetime.now(tz) if tz is not None else datetime.now()


def _as_instant(value: date, timezone: str | tzinfo | None) -> datetime:
    if not isinstance(value, datetime):
        return localize(value, timezone)
    tz = resolve_timezone(timezone)
    if tz is None:
        # Naive local dates: drop any offset after converting to system local time.
        return value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def _occurrences_for(
    descriptor: RuleDescriptor,
    options: HolidayOptions,
    year: int,
    timezone: str | tzinfo | None,
) -> list[Occurrence]:
    override = options.year_overrides.get(year)
    if override is False:
        return []
    if override is not None:
        end = override + timedelta(days=span_length(descriptor))
        return [Occurrence(start=localize(override, timezone), end=localize(end, timezone))]
    return evaluate(descriptor, year, timezone)


def substitute_occurrence(occurrence: Occurrence, non_working_days: frozenset[int]) -> Occurrence:
    """Move an occurrence that starts on a non-working day to the next working day."""

    start = occurrence.start.date()
    shift = 0
    while (start + timedelta(days=shift)).weekday() in non_working_days:
        shift += 1
        if shift == 7:
            return occurrence
    if shift == 0:
        return occurrence
    tz = occurrence.start.tzinfo
    return Occurrence(
        start=localize(start + timedelta(days=shift), tz),
        end=localize(occurrence.end.date() + timedelta(days=shift), tz),
        substitute=True,
    )


def _type_priority(first: str, second: str) -> str:
    for holiday_type in HOLIDAY_TYPES:
        if holiday_type in (first, second):
            return holiday_type
    return second


def deduplicate(holidays: list[HolidayRead]) -> list[HolidayRead]:
    """Collapse neighbours sharing name and start, keeping the higher-priority type.

    Single pass over adjacent pairs of the sorted list: of each matching pair
    the earlier entry is dropped and the later one inherits the merged type.
    Duplicates separated by another holiday starting at the same instant are
    left alone.
    """

    pending = list(holidays)
    kept: list[HolidayRead] = []
    for index, holiday in enumerate(pending):
        following = pending[index + 1] if index + 1 < len(pending) else None
        if following is not None and following.name == holiday.name and following.start == holiday.start:
            pending[index + 1] = following.model_copy(
                update={"type": _type_priority(holiday.type, following.type)}
            )
            continue
        kept.append(holiday)
    return kept


def holidays_in_year(
    registry: HolidayRegistry,
    year: int,
    *,
    timezone: str | tzinfo | None = None,
    languages: Iterable[str] = ("en",),
    substitute_names: Mapping[str, str] | None = None,
    non_working_days: frozenset[int] = DEFAULT_NON_WORKING_DAYS,
) -> list[HolidayRead]:
    languages = list(languages)
    holidays: list[HolidayRead] = []
    for key, descriptor, options in registry.list_active():
        for occurrence in _occurrences_for(descriptor, options, year, timezone):
            if not options.is_active_on(occurrence.start.date()):
                continue
            if options.substitute:
                occurrence = substitute_occurrence(occurrence, non_working_days)
            holidays.append(
                HolidayRead(
                    date=occurrence.start.date().isoformat(),
                    start=occurrence.start,
                    end=occurrence.end,
                    name=translate_name(
                        options.name,
                        languages,
                        default=key,
                        substitute=occurrence.substitute,
                        substitute_names=substitute_names,
                    ),
                    type=options.type,
                    substitute=occurrence.substitute,
                    rule=key,
                )
            )
    holidays.sort(key=lambda holiday: holiday.start)
    return deduplicate(holidays)


def is_holiday(
    registry: HolidayRegistry,
    instant: date,
    *,
    timezone: str | tzinfo | None = None,
    languages: Iterable[str] = ("en",),
    substitute_names: Mapping[str, str] | None = None,
    non_working_days: frozenset[int] = DEFAULT_NON_WORKING_DAYS,
) -> HolidayRead | None:
    """Return the holiday whose ``[start, end)`` contains ``instant``.

    Only the instant's own year is evaluated, so a multi-day holiday carried
    over from the previous year is not found.
    """

    moment = _as_instant(instant, timezone)
    holidays = holidays_in_year(
        registry,
        moment.year,
        timezone=timezone,
        languages=languages,
        substitute_names=substitute_names,
        non_working_days=non_working_days,
    )
    for holiday in holidays:
        if holiday.start <= moment < holiday.end:
            return holiday
    return None


class Holidays:
    """Holiday calendar session for one resolved locale.

    Example::

        hd = Holidays({"holidays": {"12-25": {"type": "public", "name": {"en": "Christmas"}}}})
        hd.holidays_in_year(2024)
        hd.is_holiday(datetime(2024, 12, 25, 12))
    """

    def __init__(
        self,
        locale: LocaleData | Mapping[str, Any] | None = None,
        *,
        languages: str | Iterable[str] | None = None,
        timezone: str | None = None,
        types: Iterable[str] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.init(locale, languages=languages, timezone=timezone, types=types)

    def init(
        self,
        locale: LocaleData | Mapping[str, Any] | None = None,
        *,
        languages: str | Iterable[str] | None = None,
        timezone: str | None = None,
        types: Iterable[str] | None = None,
    ) -> bool:
        """Reset the session to ``locale``; ``False`` when it has no rules."""

        if locale is not None and not isinstance(locale, LocaleData):
            locale = LocaleData.model_validate(locale)
        self.locale: LocaleData | None = locale
        self.registry = HolidayRegistry(self.settings.types if types is None else types)
        self.set_languages(languages)

        configured_timezones = locale.timezones if locale is not None else []
        self._timezone = timezone or next(iter(configured_timezones), None) or self.settings.timezone

        if locale is None or not locale.holidays:
            return False
        for key, options in locale.holidays.items():
            self.registry.register(key, options)
        return True

    def set_rule(
        self,
        rule: str,
        options: HolidayOptions | Mapping[str, Any] | str | Literal[False] | None = None,
    ) -> bool:
        """Add, replace or (with ``False``) disable a holiday rule.

        A string (or nothing) is shorthand for a public holiday named after it
        (or after the rule) in the session's first language.
        """

        if options is None or isinstance(options, str):
            options = HolidayOptions(type="public", name={self._languages[0]: options or rule})
        return self.registry.register(rule, options)

    def holidays_in_year(self, year: int | str | date | None = None, language: str | None = None) -> list[HolidayRead]:
        return holidays_in_year(
            self.registry,
            to_year(year, self._timezone),
            timezone=self._timezone,
            languages=language_chain(language, self._languages, self.settings.fallback_language),
            substitute_names=self._substitute_names(),
            non_working_days=self._non_working_days(),
        )

    def is_holiday(self, when: date | None = None) -> HolidayRead | None:
        return is_holiday(
            self.registry,
            when if when is not None else _now(self._timezone),
            timezone=self._timezone,
            languages=self._languages,
            substitute_names=self._substitute_names(),
            non_working_days=self._non_working_days(),
        )

    def get_languages(self) -> list[str]:
        return list(self._languages)

    def set_languages(self, languages: str | Iterable[str] | None = None) -> list[str]:
        configured = self.locale.languages if self.locale is not None else []
        self._languages = language_chain(languages, configured, self.settings.fallback_language)
        return self.get_languages()

    def get_timezones(self) -> list[str]:
        return list(self.locale.timezones) if self.locale is not None else []

    def set_timezone(self, timezone: str | None) -> None:
        """``None`` treats all dates as naive local dates."""
        self._timezone = timezone

    def get_timezone(self) -> str | None:
        return self._timezone

    def get_day_off(self) -> str | None:
        return self.locale.day_off if self.locale is not None else None

    def _substitute_names(self) -> dict[str, str]:
        return self.locale.substitute_names if self.locale is not None else {}

    def _non_working_days(self) -> frozenset[int]:
        if self.locale is None:
            return DEFAULT_NON_WORKING_DAYS
        return self.locale.non_working_days()
