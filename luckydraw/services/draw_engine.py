"""Winner selection and the draw-state mutations that follow it."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from threading import RLock

from luckydraw.errors import StateConflictError
from luckydraw.models import DrawState, PoolType, WinnerInfo
from luckydraw.repositories import CatalogRepository, ConfigRepository, DrawStateRepository, RosterRepository
from luckydraw.services.number_pool_service import TOKEN_WIDTH
from luckydraw.services.pool_resolver import PoolResolver, locate_prize

logger = logging.getLogger(__name__)

QUOTA_REACHED = "Prize quota reached"
POOL_EMPTY = "No numbers available in pool"


@dataclass(frozen=True)
class DrawResult:
    prize_id: str
    winners: list[str]
    state: DrawState


def pick_winners(
    candidates: Sequence[str],
    count: int,
    calibration: Iterable[str] = (),
    rng: random.Random | None = None,
) -> tuple[list[str], list[str]]:
    """Choose ``count`` distinct winners from ``candidates``.

    Calibrated tokens found in the pool are taken first, in list order; the
    rest are drawn uniformly without replacement. The final list is shuffled
    so forced picks do not stand out by position.

    Returns ``(winners, consumed_calibration_tokens)``.
    """

    rng = rng or random.Random()
    pool = list(candidates)
    count = max(0, min(count, len(pool)))
    index = {token: i for i, token in enumerate(pool)}

    winners: list[str] = []
    consumed: list[str] = []
    for token in calibration:
        if len(winners) >= count:
            break
        match = token if token in index else None
        if match is None and token.isdigit():
            padded = token.zfill(TOKEN_WIDTH)
            match = padded if padded in index else None
        if match is None:
            logger.info("Calibration token %s not in candidate pool", token)
            continue
        winners.append(match)
        consumed.append(token)
        del index[match]

    # Partial Fisher-Yates over whatever calibration left behind.
    rest = [token for token in pool if token in index]
    needed = count - len(winners)
    for i in range(needed):
        j = rng.randrange(i, len(rest))
        rest[i], rest[j] = rest[j], rest[i]
    winners.extend(rest[:needed])

    rng.shuffle(winners)
    return winners, consumed


class DrawEngine:
    """Draw winners for a prize and commit the result.

    All mutations happen under ``lock`` so two requests can never both read
    the same remaining count.
    """

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        state_repository: DrawStateRepository,
        config_repository: ConfigRepository,
        roster_repository: RosterRepository,
        lock: RLock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._catalog = catalog_repository
        self._state = state_repository
        self._config = config_repository
        self._roster = roster_repository
        self._lock = lock or RLock()
        self._rng = rng or random.Random()

    def draw(
        self,
        prize_id: str,
        requested_count: int,
        restrict_to: Iterable[str] | None = None,
    ) -> DrawResult:
        """Draw up to ``requested_count`` winners for ``prize_id``.

        ``restrict_to`` limits the candidates to a previously frozen set (the
        rolling pool shown on screen).

        The draw-state file is written first. The roster and calibration are
        only updated once the ledger is on disk, so a failed state write
        leaves every document as it was.
        """

        with self._lock:
            catalog = self._catalog.load()
            state = self._state.load()
            config = self._config.load()
            roster = self._roster.load()

            rnd, prize = locate_prize(catalog, prize_id)
            remaining = int(state.prize_remaining.get(prize_id, 0))
            candidates = PoolResolver.resolve_from(catalog, state, config, roster, prize_id)
            if restrict_to is not None:
                frozen = set(restrict_to)
                candidates = [c for c in candidates if c in frozen]

            actual = min(int(requested_count), remaining, len(candidates))
            if actual <= 0:
                reason = QUOTA_REACHED if remaining <= 0 else POOL_EMPTY
                raise StateConflictError(
                    message=reason,
                    details={"prizeId": prize_id, "remaining": remaining, "candidates": len(candidates)},
                )

            calibration = config.calibration.get(prize_id, [])
            winners, consumed = pick_winners(candidates, actual, calibration, self._rng)

            config_changed = config.consume_calibration(prize_id, consumed)

            roster_changed = False
            if rnd.pool_type is PoolType.LIVE:
                roster.remove(winners)
                roster_changed = True
            elif not config.allow_repeat_win:
                won = set(winners)
                state.number_pool = [n for n in state.number_pool if n not in won]

            info = state.winners_by_prize.get(prize_id)
            if info is None:
                info = WinnerInfo(level=prize.level, name=prize.name)
                state.winners_by_prize[prize_id] = info
            info.numbers.extend(winners)
            state.all_winners.extend(winners)
            state.prize_remaining[prize_id] = remaining - actual

            self._state.save(state)
            if roster_changed:
                self._roster.save(roster)
            if config_changed:
                self._config.save(config)

            logger.info(
                "Drew %d/%d for prize %s (calibrated=%d, remaining=%d)",
                actual,
                requested_count,
                prize_id,
                len(consumed),
                state.prize_remaining[prize_id],
            )
            return DrawResult(prize_id=prize_id, winners=winners, state=state)

    def reset(self, prize_id: str | None = None) -> DrawState:
        """Clear win status for one prize, or for every prize.

        The number pool and the live roster are never restored or regenerated.
        """

        with self._lock:
            catalog = self._catalog.load()
            state = self._state.load()

            if prize_id:
                _rnd, prize = locate_prize(catalog, prize_id)
                state.forget_prize(prize_id)
                state.prize_remaining[prize_id] = prize.quantity
                logger.info("Reset prize %s", prize_id)
            else:
                state.prize_remaining = {p.id: p.quantity for p in catalog.iter_prizes()}
                state.winners_by_prize = {}
                state.all_winners = []
                logger.info("Reset all prizes")

            self._state.save(state)
            return state
