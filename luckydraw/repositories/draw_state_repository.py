"""Repository for the durable draw state (``lottery-state.json``)."""

from __future__ import annotations

import os

from luckydraw.models.draw_state import DrawState
from luckydraw.repositories.json_store import JsonRepository


class DrawStateRepository(JsonRepository[DrawState]):
    """Number pool, remaining quotas and winner ledgers."""

    filename = "lottery-state.json"

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        super().__init__(data_dir, from_dict=DrawState.from_dict, to_dict=DrawState.to_dict, default=DrawState)
