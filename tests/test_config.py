import pytest

from holiday_rules.core.config import HOLIDAY_TYPES, Settings
from holiday_rules.services.holidays import Holidays

from .factories import build_locale_data


def test_default_settings(settings: Settings) -> None:
    assert settings.fallback_language == "en"
    assert settings.timezone is None
    assert tuple(settings.types) == HOLIDAY_TYPES


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOLIDAYS_FALLBACK_LANGUAGE", "de")
    monkeypatch.setenv("HOLIDAYS_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("HOLIDAYS_TYPES", '["public", "bank"]')

    settings = Settings()

    assert settings.fallback_language == "de"
    assert settings.timezone == "Europe/Berlin"
    assert settings.types == ["public", "bank"]


def test_session_uses_explicit_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOLIDAYS_FALLBACK_LANGUAGE", "de")
    monkeypatch.setenv("HOLIDAYS_TYPES", '["bank"]')

    hd = Holidays(build_locale_data(languages=[]), settings=Settings())

    assert hd.get_languages() == ["de"]
    assert [h.date for h in hd.holidays_in_year(2024)] == ["2024-05-27"]
    # No German name: the first translation available is used.
    assert hd.holidays_in_year(2024)[0].name == "Spring Bank Holiday"
