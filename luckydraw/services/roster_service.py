"""Live check-in roster use-cases."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import asdict
from threading import RLock
from typing import Any, Callable

from luckydraw.errors import StateConflictError, ValidationError
from luckydraw.models import RegisterSettings
from luckydraw.repositories import ConfigRepository, RosterRepository

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"^[0-9]+$")
_ALNUM = re.compile(r"^[A-Z0-9]+$")


def normalize_registration(raw: str, settings: RegisterSettings) -> str:
    """Validate an attendee id against the configured shape and normalize it."""

    token = raw.strip()
    if not token:
        raise ValidationError(message="Employee id must not be empty")
    if settings.allowLetters:
        token = token.upper()
        if not _ALNUM.match(token):
            raise ValidationError(message="Employee id may only contain letters and digits")
    elif not _DIGITS.match(token):
        raise ValidationError(message="Employee id may only contain digits")

    if len(token) != settings.length:
        kind = "letters or digits" if settings.allowLetters else "digits"
        raise ValidationError(message=f"Employee id must be {settings.length} {kind}")
    return token


class RosterService:
    def __init__(
        self,
        roster_repository: RosterRepository,
        config_repository: ConfigRepository,
        lock: RLock,
        notify: Callable[[], Any] | None = None,
    ) -> None:
        self._roster = roster_repository
        self._config = config_repository
        self._lock = lock
        self._notify = notify

    def status(self) -> dict[str, Any]:
        roster = self._roster.load()
        settings = self._config.load().register_settings
        return {
            "isOpen": roster.is_open,
            "registrations": list(roster.registrations),
            "count": len(roster.registrations),
            "registerSettings": asdict(settings),
            "version": roster.cleared_at,
        }

    def register(self, employee_id: str) -> str:
        """Add an attendee to the roster; returns the stored token."""

        with self._lock:
            roster = self._roster.load()
            if not roster.is_open:
                raise StateConflictError(message="Registration is closed")
            token = normalize_registration(employee_id, self._config.load().register_settings)
            if token in roster.registrations:
                raise StateConflictError(message="This id is already registered")
            roster.registrations.append(token)
            self._roster.save(roster)
            logger.info("Registered %s (roster size %d)", token, len(roster.registrations))
            return token

    def set_open(self, is_open: bool) -> None:
        with self._lock:
            roster = self._roster.load()
            roster.is_open = bool(is_open)
            self._roster.save(roster)
            logger.info("Registration %s", "opened" if roster.is_open else "closed")

    def clear(self) -> None:
        with self._lock:
            roster = self._roster.load()
            roster.registrations = []
            roster.cleared_at = int(time.time() * 1000)
            self._roster.save(roster)
            logger.info("Roster cleared")
            if self._notify is not None:
                self._notify()
