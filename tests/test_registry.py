import logging

import pytest
from pydantic import ValidationError

from holiday_rules.services.registry import HolidayRegistry
from holiday_rules.services.rules import Fixed

from .factories import build_holiday_options


def test_register_stores_descriptor_and_options(registry: HolidayRegistry) -> None:
    options = build_holiday_options(name={"en": "Christmas Day"})

    assert registry.register("12-25", options)

    assert "12-25" in registry
    assert len(registry) == 1
    descriptor, stored = registry.get("12-25")
    assert descriptor == Fixed(12, 25)
    assert stored.name == {"en": "Christmas Day"}
    assert registry.list_active() == [("12-25", Fixed(12, 25), stored)]


def test_register_accepts_plain_mappings(registry: HolidayRegistry) -> None:
    assert registry.register("easter 1", {"type": "bank", "name": {"en": "Easter Monday"}})

    assert registry.get("easter 1")[1].type == "bank"


def test_unparsable_rule_is_logged_and_rejected(
    registry: HolidayRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    registry.register("12-25", build_holiday_options())

    with caplog.at_level(logging.WARNING, logger="holiday_rules.services.registry"):
        assert not registry.register("3rd fooday in may", build_holiday_options())

    assert "could not parse rule: 3rd fooday in may" in caplog.text
    assert "3rd fooday in may" not in registry
    assert [key for key, _, _ in registry.list_active()] == ["12-25"]


def test_unknown_type_keeps_previous_entry(registry: HolidayRegistry) -> None:
    registry.register("12-25", build_holiday_options(name={"en": "Christmas Day"}))

    assert not registry.register("12-25", build_holiday_options(type="festival", name={"en": "Other"}))

    assert registry.get("12-25")[1].name == {"en": "Christmas Day"}


def test_type_filter_is_constructor_configuration(caplog: pytest.LogCaptureFixture) -> None:
    registry = HolidayRegistry(types=["bank", "public"])

    with caplog.at_level(logging.INFO, logger="holiday_rules.services.registry"):
        assert not registry.register("10-31", build_holiday_options(type="observance"))

    assert registry.types == ("public", "bank")
    assert "holiday type 'observance' is not enabled" in caplog.text
    assert registry.register("05-01", build_holiday_options(type="bank"))


def test_disable_and_re_register(registry: HolidayRegistry) -> None:
    registry.register("12-25", build_holiday_options())

    assert registry.register("12-25", False)
    assert registry.is_disabled("12-25")
    assert "12-25" not in registry
    assert registry.get("12-25") is None
    assert registry.list_active() == []
    # Already disabled.
    assert not registry.register("12-25", False)

    assert registry.register("12-25", build_holiday_options())
    assert not registry.is_disabled("12-25")
    assert len(registry) == 1


def test_disable_unknown_rule_returns_false(registry: HolidayRegistry) -> None:
    assert not registry.register("01-01", False)


def test_active_range_without_boundaries_raises(registry: HolidayRegistry) -> None:
    with pytest.raises(ValidationError):
        registry.register("12-25", {"type": "public", "active": [{}]})


def test_active_must_be_a_list(registry: HolidayRegistry) -> None:
    with pytest.raises(ValidationError):
        registry.register("12-25", {"type": "public", "active": "2020"})


def test_missing_type_is_rejected(registry: HolidayRegistry, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="holiday_rules.services.registry"):
        assert not registry.register("12-25", {"name": {"en": "Christmas Day"}})

    assert "holiday type None is not enabled" in caplog.text
    assert "12-25" not in registry


def test_none_disables_like_false(registry: HolidayRegistry) -> None:
    registry.register("12-25", build_holiday_options())

    assert registry.register("12-25", None)
    assert registry.is_disabled("12-25")
    assert not registry.register("01-01", None)
