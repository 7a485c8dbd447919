from typing import Any

from holiday_rules.schemas.holiday import HolidayOptions, LocaleData


def build_holiday_options(**overrides: Any) -> HolidayOptions:
    data: dict[str, Any] = {
        "type": "public",
        "name": {"en": "Factory Day"},
    }
    data.update(overrides)
    return HolidayOptions.model_validate(data)


def build_locale_data(**overrides: Any) -> LocaleData:
    data: dict[str, Any] = {
        "holidays": {
            "01-01": {"type": "public", "name": {"en": "New Year's Day", "de": "Neujahr"}},
            "easter -2": {"type": "public", "name": {"en": "Good Friday", "de": "Karfreitag"}},
            "easter 1": {"type": "public", "name": {"en": "Easter Monday", "de": "Ostermontag"}},
            "last mon in may": {"type": "bank", "name": {"en": "Spring Bank Holiday"}},
            "12-25": {
                "type": "public",
                "substitute": True,
                "name": {"en": "Christmas Day", "de": "Weihnachtstag"},
            },
            "12-26": {"type": "public", "name": {"en": "Boxing Day", "de": "Stephanstag"}},
        },
        "languages": ["en"],
        "timezones": [],
        "dayoff": "sunday",
        "substitutes": {"en": "substitute day", "de": "Ersatztag"},
    }
    data.update(overrides)
    return LocaleData.model_validate(data)
