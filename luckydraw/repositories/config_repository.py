"""Repository for operator configuration (``config.json``)."""

from __future__ import annotations

import os

from luckydraw.models.settings import LotteryConfig
from luckydraw.repositories.json_store import JsonRepository


class ConfigRepository(JsonRepository[LotteryConfig]):
    filename = "config.json"

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        super().__init__(
            data_dir,
            from_dict=LotteryConfig.from_dict,
            to_dict=LotteryConfig.to_dict,
            default=LotteryConfig,
        )
