"""File-backed repositories, one per JSON document."""

from luckydraw.repositories.catalog_repository import CatalogRepository
from luckydraw.repositories.config_repository import ConfigRepository
from luckydraw.repositories.draw_state_repository import DrawStateRepository
from luckydraw.repositories.roster_repository import RosterRepository

__all__ = ["CatalogRepository", "ConfigRepository", "DrawStateRepository", "RosterRepository"]
