"""Operator configuration with partial-update semantics."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable

from luckydraw.models import LotteryConfig
from luckydraw.repositories import ConfigRepository

logger = logging.getLogger(__name__)

# Sections merged key-by-key into the stored value; anything else is replaced.
NESTED_SECTIONS = frozenset(
    {"numberPoolConfig", "fontSizes", "displaySettings", "fontColors", "registerSettings"}
)


def merge_config(current: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(current)
    for key, value in updates.items():
        if key in NESTED_SECTIONS and isinstance(value, dict):
            section = dict(merged.get(key) or {})
            if key == "numberPoolConfig" and "excludePatterns" in value and "excludeContains" not in value:
                value = {**value, "excludeContains": value["excludePatterns"]}
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value
    return merged


class ConfigService:
    def __init__(
        self,
        config_repository: ConfigRepository,
        lock: RLock,
        notify: Callable[[], Any] | None = None,
    ) -> None:
        self._config = config_repository
        self._lock = lock
        self._notify = notify

    def get(self) -> LotteryConfig:
        return self._config.load()

    def update(self, updates: dict[str, Any]) -> LotteryConfig:
        """Merge provided top-level keys; nested sections are shallow-merged.

        ``calibration`` is replaced as a whole, so an empty map removes it.
        """

        with self._lock:
            current = self._config.load()
            config = LotteryConfig.from_dict(merge_config(current.to_dict(), updates))
            self._config.save(config)
            logger.info("Config updated: %s", ", ".join(sorted(updates)) or "(no keys)")
            if self._notify is not None:
                self._notify()
            return config
