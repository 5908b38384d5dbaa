"""Domain models (plain dataclasses persisted as JSON)."""

from luckydraw.models.catalog import Catalog, PoolType, Prize, Round
from luckydraw.models.draw_state import DrawState, WinnerInfo
from luckydraw.models.roster import LiveRoster
from luckydraw.models.session import DisplaySession, SessionPhase
from luckydraw.models.settings import LotteryConfig, NumberPoolConfig, RegisterSettings

__all__ = [
    "Catalog",
    "DisplaySession",
    "DrawState",
    "LiveRoster",
    "LotteryConfig",
    "NumberPoolConfig",
    "PoolType",
    "Prize",
    "RegisterSettings",
    "Round",
    "SessionPhase",
    "WinnerInfo",
]
