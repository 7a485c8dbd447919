import pytest

from holiday_rules.core.config import Settings
from holiday_rules.schemas.holiday import LocaleData
from holiday_rules.services.holidays import Holidays
from holiday_rules.services.registry import HolidayRegistry

from .factories import build_locale_data


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in ("HOLIDAYS_FALLBACK_LANGUAGE", "HOLIDAYS_TIMEZONE", "HOLIDAYS_TYPES"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


@pytest.fixture()
def locale_data() -> LocaleData:
    return build_locale_data()


@pytest.fixture()
def holidays(locale_data: LocaleData, settings: Settings) -> Holidays:
    return Holidays(locale_data, settings=settings)


@pytest.fixture()
def registry() -> HolidayRegistry:
    return HolidayRegistry()
