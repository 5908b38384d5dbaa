"""Repository for the live check-in roster (``live-pool.json``)."""

from __future__ import annotations

import os

from luckydraw.models.roster import LiveRoster
from luckydraw.repositories.json_store import JsonRepository


class RosterRepository(JsonRepository[LiveRoster]):
    filename = "live-pool.json"

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        super().__init__(data_dir, from_dict=LiveRoster.from_dict, to_dict=LiveRoster.to_dict, default=LiveRoster)
