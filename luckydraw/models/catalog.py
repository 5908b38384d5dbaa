"""Prize catalog: rounds and the prizes they own."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

DEFAULT_PRIZE_COLOR = "#FFD700"


class PoolType(str, Enum):
    PRESET = "preset"
    LIVE = "live"


@dataclass
class Prize:
    """A drawable award with ``quantity`` winner slots."""

    id: str
    level: str
    name: str
    quantity: int
    color: str = DEFAULT_PRIZE_COLOR
    sponsor: str = ""
    image: str | None = None

    @property
    def seq(self) -> int:
        try:
            return int(self.id.rsplit("-", 1)[1])
        except (IndexError, ValueError):
            return 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Prize:
        return cls(
            id=str(data["id"]),
            level=str(data.get("level") or ""),
            name=str(data.get("name") or ""),
            quantity=int(data.get("quantity") or 0),
            color=str(data.get("color") or DEFAULT_PRIZE_COLOR),
            sponsor=str(data.get("sponsor") or ""),
            image=data.get("image") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "level": self.level,
            "name": self.name,
            "quantity": self.quantity,
            "color": self.color,
            "sponsor": self.sponsor,
        }
        if self.image:
            out["image"] = self.image
        return out


@dataclass
class Round:
    """A phase of the event grouping prizes that share one pool type."""

    id: int
    name: str
    pool_type: PoolType = PoolType.PRESET
    prizes: list[Prize] = field(default_factory=list)

    def find_prize(self, prize_id: str) -> Prize | None:
        for prize in self.prizes:
            if prize.id == prize_id:
                return prize
        return None

    def next_prize_id(self) -> str:
        seq = max((p.seq for p in self.prizes), default=0) + 1
        return f"{self.id}-{seq}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Round:
        raw_type = str(data.get("poolType") or PoolType.PRESET.value)
        try:
            pool_type = PoolType(raw_type)
        except ValueError:
            pool_type = PoolType.PRESET
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            pool_type=pool_type,
            prizes=[Prize.from_dict(p) for p in data.get("prizes") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "poolType": self.pool_type.value,
            "prizes": [p.to_dict() for p in self.prizes],
        }


@dataclass
class Catalog:
    """All rounds, in display order."""

    rounds: list[Round] = field(default_factory=list)

    def find_round(self, round_id: int) -> Round | None:
        for rnd in self.rounds:
            if rnd.id == round_id:
                return rnd
        return None

    def find_prize(self, prize_id: str) -> tuple[Round, Prize] | None:
        for rnd in self.rounds:
            prize = rnd.find_prize(prize_id)
            if prize is not None:
                return rnd, prize
        return None

    def iter_prizes(self) -> Iterator[Prize]:
        for rnd in self.rounds:
            yield from rnd.prizes

    def next_round_id(self) -> int:
        return max((r.id for r in self.rounds), default=0) + 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Catalog:
        return cls(rounds=[Round.from_dict(r) for r in data.get("rounds") or []])

    def to_dict(self) -> dict[str, Any]:
        return {"rounds": [r.to_dict() for r in self.rounds]}
