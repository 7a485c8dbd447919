"""Rule-based public holiday calendars."""

from holiday_rules.schemas.holiday import HolidayOptions, HolidayRead, LocaleData
from holiday_rules.services.holidays import Holidays
from holiday_rules.services.rules import parse_rule

__all__ = ["HolidayOptions", "HolidayRead", "Holidays", "LocaleData", "parse_rule"]
