from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from holiday_rules.core.config import HolidayType
from holiday_rules.services.rules import WEEKDAYS


def _coerce_boundary(value: Any) -> Any:
    """Bare years mark January 1st of that year."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return date(value, 1, 1)
    if isinstance(value, str) and len(value) == 4 and value.isdigit():
        return date(int(value), 1, 1)
    if isinstance(value, datetime):
        return value.date()
    return value


class ActiveRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: date | None = Field(default=None, alias="from")
    to: date | None = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def coerce_year(cls, value: Any) -> Any:
        return _coerce_boundary(value)

    @model_validator(mode="after")
    def validate_bounds(self) -> "ActiveRange":
        if self.from_ is None and self.to is None:
            raise ValueError("active range needs a 'from' or 'to' boundary")
        return self

    def contains(self, day: date) -> bool:
        if self.from_ is not None and day < self.from_:
            return False
        if self.to is not None and day >= self.to:
            return False
        return True


class HolidayOptions(BaseModel):
    """Per-rule metadata as delivered by the locale data."""

    model_config = ConfigDict(populate_by_name=True)

    # Checked against the registry's configured types rather than here, so an
    # unknown or missing type is a soft rejection instead of a validation error.
    type: str | None = None
    name: dict[str, str] = Field(default_factory=dict)
    substitute: bool = False
    active: list[ActiveRange] = Field(default_factory=list)
    year_overrides: dict[int, date | Literal[False]] = Field(default_factory=dict, alias="yearOverrides")

    @model_validator(mode="before")
    @classmethod
    def fold_enable_disable(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not ("enable" in data or "disable" in data):
            return data
        data = dict(data)
        overrides = dict(data.pop("yearOverrides", None) or data.pop("year_overrides", None) or {})
        for value in data.pop("disable", None) or []:
            day = date.fromisoformat(str(value)[:10])
            overrides.setdefault(day.year, False)
        for value in data.pop("enable", None) or []:
            day = date.fromisoformat(str(value)[:10])
            overrides[day.year] = day
        data["year_overrides"] = overrides
        return data

    def is_active_on(self, day: date) -> bool:
        if not self.active:
            return True
        return any(window.contains(day) for window in self.active)


class LocaleData(BaseModel):
    """Already-resolved rule set and lookup tables for one locale."""

    model_config = ConfigDict(populate_by_name=True)

    holidays: dict[str, HolidayOptions] = Field(default_factory=dict)
    languages: list[str] = Field(default_factory=list)
    timezones: list[str] = Field(default_factory=list)
    day_off: str | None = Field(default="sunday", alias="dayoff")
    weekend: list[str] = Field(default_factory=lambda: ["saturday", "sunday"])
    substitute_names: dict[str, str] = Field(default_factory=dict, alias="substitutes")

    @field_validator("day_off")
    @classmethod
    def validate_day_off(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.lower()
        if value not in WEEKDAYS:
            raise ValueError(f"unknown weekday: {value}")
        return value

    @field_validator("weekend")
    @classmethod
    def validate_weekend(cls, value: list[str]) -> list[str]:
        days = [day.lower() for day in value]
        unknown = [day for day in days if day not in WEEKDAYS]
        if unknown:
            raise ValueError(f"unknown weekday(s): {', '.join(unknown)}")
        return days

    def non_working_days(self) -> frozenset[int]:
        days = {WEEKDAYS[day] for day in self.weekend}
        if self.day_off is not None:
            days.add(WEEKDAYS[self.day_off])
        return frozenset(days)


class HolidayRead(BaseModel):
    date: str
    start: datetime
    end: datetime
    name: str
    type: HolidayType
    substitute: bool = False
    rule: str
