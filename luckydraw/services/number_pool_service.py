"""Preset number pool: generation, manual set and bulk import."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from threading import RLock
from typing import Any, Callable

from luckydraw.errors import ValidationError
from luckydraw.models import DrawState, NumberPoolConfig
from luckydraw.repositories import CatalogRepository, ConfigRepository, DrawStateRepository

logger = logging.getLogger(__name__)

TOKEN_WIDTH = 3
MAX_POOL_SIZE = 100_000

_CSV_SPLIT = re.compile(r"[,\n\r]+")


def pad_token(value: object) -> str:
    token = str(value).strip()
    return token.zfill(TOKEN_WIDTH) if token.isdigit() else token


def normalize_tokens(values: Iterable[object]) -> list[str]:
    """Pad numeric tokens and drop blanks and duplicates (first one wins)."""

    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        token = pad_token(value)
        if token and token not in seen:
            seen.add(token)
            out.append(token)
    return out


def _same_number(candidate: str, pattern: str) -> bool:
    if pattern.isdigit():
        return candidate.lstrip("0") == pattern.lstrip("0")
    return candidate == pattern


def generate_number_pool(config: NumberPoolConfig) -> list[str]:
    """Numbers ``start..end`` minus the configured exclusions, zero-padded.

    ``excludeContains`` drops every number whose decimal digits contain the
    pattern ("4" drops 4, 14, 40..49, 104, ...). ``excludeExact`` drops only
    the number equal to the pattern, ignoring leading zeros ("13" and "013"
    both drop 13 but keep 113).
    """

    start, end = int(config.start), int(config.end)
    if start > end:
        raise ValidationError(message="start must be <= end", details={"start": start, "end": end})
    if end - start + 1 > MAX_POOL_SIZE:
        raise ValidationError(message=f"Pool range too large (max {MAX_POOL_SIZE})")

    contains = [p for p in (str(x).strip() for x in config.excludeContains) if p]
    exact = [p for p in (str(x).strip() for x in config.excludeExact) if p]

    pool: list[str] = []
    for number in range(start, end + 1):
        digits = str(number)
        if any(p in digits for p in contains):
            continue
        if any(_same_number(digits, p) for p in exact):
            continue
        pool.append(digits.zfill(TOKEN_WIDTH))
    return pool


def parse_csv(text: str) -> list[str]:
    """Numeric tokens from comma/newline separated text, padded and deduplicated."""

    parts = (part.strip() for part in _CSV_SPLIT.split(text or ""))
    return normalize_tokens(part for part in parts if part.isdigit())


class NumberPoolService:
    def __init__(
        self,
        state_repository: DrawStateRepository,
        config_repository: ConfigRepository,
        catalog_repository: CatalogRepository,
        lock: RLock,
        notify: Callable[[], Any] | None = None,
    ) -> None:
        self._state = state_repository
        self._config = config_repository
        self._catalog = catalog_repository
        self._lock = lock
        self._notify = notify

    def _changed(self) -> None:
        if self._notify is not None:
            self._notify()

    def get_pool(self) -> list[str]:
        return self._state.load().number_pool

    def set_pool(self, numbers: Iterable[object]) -> list[str]:
        """Replace the pool and reset every prize's draw state."""

        with self._lock:
            pool = normalize_tokens(numbers)
            catalog = self._catalog.load()
            state = DrawState(
                number_pool=pool,
                prize_remaining={p.id: p.quantity for p in catalog.iter_prizes()},
            )
            self._state.save(state)

            config = self._config.load()
            config.number_pool.type = "manual"
            self._config.save(config)
            logger.info("Number pool set manually (%d tokens), draw state reset", len(pool))
            self._changed()
            return pool

    def generate(self, changes: dict[str, Any]) -> tuple[list[str], NumberPoolConfig]:
        """Update the range/exclusion config with ``changes`` and regenerate.

        ``changes`` may carry ``start``, ``end``, ``exclude_contains``,
        ``exclude_exact`` and the legacy ``exclude_patterns``.
        """

        with self._lock:
            config = self._config.load()
            pool_config = config.number_pool
            if changes.get("start") is not None:
                pool_config.start = int(changes["start"])
            if changes.get("end") is not None:
                pool_config.end = int(changes["end"])
            if changes.get("exclude_contains") is not None:
                pool_config.excludeContains = list(changes["exclude_contains"])
            elif changes.get("exclude_patterns") is not None:
                pool_config.excludeContains = list(changes["exclude_patterns"])
            if changes.get("exclude_exact") is not None:
                pool_config.excludeExact = list(changes["exclude_exact"])
            pool_config.type = "auto"

            pool = generate_number_pool(pool_config)
            self._config.save(config)

            state = self._state.load()
            state.number_pool = pool
            self._state.save(state)
            logger.info("Generated number pool %d..%d (%d tokens)", pool_config.start, pool_config.end, len(pool))
            self._changed()
            return pool, pool_config

    def import_csv(self, text: str) -> list[str]:
        with self._lock:
            pool = parse_csv(text)
            if not pool:
                raise ValidationError(message="No valid numbers found")
            state = self._state.load()
            state.number_pool = pool
            self._state.save(state)

            config = self._config.load()
            config.number_pool.type = "manual"
            self._config.save(config)
            logger.info("Imported number pool (%d tokens)", len(pool))
            self._changed()
            return pool

    def ensure_initialized(self) -> tuple[DrawState, int]:
        """Seed the pool from config when no draw state has been saved yet.

        Returns the state and the size of the configured (full) pool.
        """

        with self._lock:
            config = self._config.load()
            full_pool = generate_number_pool(config.number_pool)
            state = self._state.load()
            if not self._state.exists():
                catalog = self._catalog.load()
                state = DrawState(
                    number_pool=list(full_pool),
                    prize_remaining={p.id: p.quantity for p in catalog.iter_prizes()},
                )
                self._state.save(state)
                logger.info("Initialized number pool from config (%d tokens)", len(full_pool))
            return state, len(full_pool)
