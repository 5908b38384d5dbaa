"""Repository for the prize catalog (``prizes.json``)."""

from __future__ import annotations

import os

from luckydraw.models.catalog import Catalog
from luckydraw.repositories.json_store import JsonRepository


class CatalogRepository(JsonRepository[Catalog]):
    """Rounds and their prizes."""

    filename = "prizes.json"

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        super().__init__(data_dir, from_dict=Catalog.from_dict, to_dict=Catalog.to_dict, default=Catalog)
