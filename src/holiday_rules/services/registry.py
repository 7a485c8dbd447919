"""Per-locale store of holiday rules and their compiled descriptors."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from holiday_rules.core.config import HOLIDAY_TYPES
from holiday_rules.schemas.holiday import HolidayOptions
from holiday_rules.services.rules import RuleDescriptor, parse_rule

logger = logging.getLogger(__name__)


class HolidayRegistry:
    """Rule key -> (compiled descriptor, mutable metadata).

    Descriptors and metadata live in separate maps keyed by the same rule key.
    Disabled rules are tombstoned rather than removed so that registering the
    key again brings them back. Not thread-safe: build once, then query.
    """

    def __init__(self, types: Iterable[str] | None = None) -> None:
        allowed = set(HOLIDAY_TYPES if types is None else types)
        self.types: tuple[str, ...] = tuple(t for t in HOLIDAY_TYPES if t in allowed)
        self._descriptors: dict[str, RuleDescriptor] = {}
        self._options: dict[str, HolidayOptions] = {}
        self._disabled: set[str] = set()

    def register(
        self,
        key: str,
        options: HolidayOptions | Mapping[str, Any] | Literal[False] | None,
    ) -> bool:
        """Add or replace the rule ``key``; ``False`` or ``None`` disables an existing rule.

        Malformed options (e.g. an active range without boundaries) raise
        ``pydantic.ValidationError``. A missing or unsupported type or a rule
        outside the grammar only returns ``False`` and keeps any previous entry.
        """

        if options is False or options is None:
            return self.disable(key)

        if not isinstance(options, HolidayOptions):
            options = HolidayOptions.model_validate(options)

        if options.type not in self.types:
            logger.info("skipping rule %r: holiday type %r is not enabled", key, options.type)
            return False

        descriptor, ok = parse_rule(key)
        if not ok:
            logger.warning("could not parse rule: %s", key)
            return False

        self._descriptors[key] = descriptor
        self._options[key] = options
        self._disabled.discard(key)
        return True

    def disable(self, key: str) -> bool:
        if key not in self._options or key in self._disabled:
            return False
        self._disabled.add(key)
        return True

    def is_disabled(self, key: str) -> bool:
        return key in self._disabled

    def get(self, key: str) -> tuple[RuleDescriptor, HolidayOptions] | None:
        if key not in self._options or key in self._disabled:
            return None
        return self._descriptors[key], self._options[key]

    def list_active(self) -> list[tuple[str, RuleDescriptor, HolidayOptions]]:
        return [
            (key, self._descriptors[key], options)
            for key, options in self._options.items()
            if key not in self._disabled
        ]

    def __contains__(self, key: object) -> bool:
        return key in self._options and key not in self._disabled

    def __len__(self) -> int:
        return len(self._options) - len(self._disabled)
