"""Eligible candidate set for a prize."""

from __future__ import annotations

from collections.abc import Iterable

from luckydraw.errors import NotFoundError
from luckydraw.models import Catalog, DrawState, LiveRoster, LotteryConfig, PoolType, Prize, Round
from luckydraw.repositories import CatalogRepository, ConfigRepository, DrawStateRepository, RosterRepository


def eligible_candidates(
    source: Iterable[str],
    prize_winners: Iterable[str],
    all_winners: Iterable[str],
    allow_repeat_win: bool,
) -> list[str]:
    """Filter ``source`` down to tokens that may still win.

    A prize's own winners are always excluded; winners of any prize are
    excluded too unless repeat wins are allowed.
    """

    excluded = set(prize_winners)
    if not allow_repeat_win:
        excluded.update(all_winners)
    return [token for token in source if token not in excluded]


def locate_prize(catalog: Catalog, prize_id: str) -> tuple[Round, Prize]:
    found = catalog.find_prize(prize_id)
    if found is None:
        raise NotFoundError(message="Prize not found", details={"prizeId": prize_id})
    return found


class PoolResolver:
    """Resolve the candidates a draw on a prize may pick from."""

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        state_repository: DrawStateRepository,
        config_repository: ConfigRepository,
        roster_repository: RosterRepository,
    ) -> None:
        self._catalog = catalog_repository
        self._state = state_repository
        self._config = config_repository
        self._roster = roster_repository

    def resolve_candidates(self, prize_id: str) -> list[str]:
        return self.resolve_from(
            self._catalog.load(),
            self._state.load(),
            self._config.load(),
            self._roster.load(),
            prize_id,
        )

    @staticmethod
    def resolve_from(
        catalog: Catalog,
        state: DrawState,
        config: LotteryConfig,
        roster: LiveRoster,
        prize_id: str,
    ) -> list[str]:
        """Same as :meth:`resolve_candidates` over already-loaded documents."""

        rnd, _prize = locate_prize(catalog, prize_id)
        source = roster.registrations if rnd.pool_type is PoolType.LIVE else state.number_pool
        return eligible_candidates(
            source,
            state.winners_of(prize_id),
            state.all_winners,
            config.allow_repeat_win,
        )
