"""Full display snapshot: session fields merged with catalog, state and config."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from luckydraw.models import DisplaySession
from luckydraw.repositories import CatalogRepository, ConfigRepository, DrawStateRepository


class SnapshotBuilder:
    def __init__(
        self,
        catalog_repository: CatalogRepository,
        state_repository: DrawStateRepository,
        config_repository: ConfigRepository,
    ) -> None:
        self._catalog = catalog_repository
        self._state = state_repository
        self._config = config_repository

    def build(self, session: DisplaySession) -> dict[str, Any]:
        catalog = self._catalog.load()
        state = self._state.load()
        config = self._config.load()

        snapshot = session.to_dict()
        snapshot.update(
            {
                "rounds": catalog.to_dict()["rounds"],
                "prizeRemaining": dict(state.prize_remaining),
                "winnersByPrize": {k: v.to_dict() for k, v in state.winners_by_prize.items()},
                "numberPool": list(state.number_pool),
                "allowRepeatWin": config.allow_repeat_win,
                "numbersPerRow": config.numbers_per_row,
                "fontSizes": asdict(config.font_sizes),
                "displaySettings": asdict(config.display_settings),
                "fontColors": asdict(config.font_colors),
            }
        )
        return snapshot
