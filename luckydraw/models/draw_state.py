"""Durable draw state: the preset pool, remaining quotas and winner ledgers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class WinnerInfo:
    level: str
    name: str
    numbers: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WinnerInfo:
        return cls(
            level=str(data.get("level") or ""),
            name=str(data.get("name") or ""),
            numbers=[str(n) for n in data.get("numbers") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "name": self.name, "numbers": list(self.numbers)}


@dataclass
class DrawState:
    number_pool: list[str] = field(default_factory=list)
    prize_remaining: dict[str, int] = field(default_factory=dict)
    winners_by_prize: dict[str, WinnerInfo] = field(default_factory=dict)
    all_winners: list[str] = field(default_factory=list)

    def winners_of(self, prize_id: str) -> list[str]:
        info = self.winners_by_prize.get(prize_id)
        return list(info.numbers) if info else []

    def forget_prize(self, prize_id: str) -> list[str]:
        """Drop a prize's ledger and unwind its tokens from ``all_winners``.

        Returns the tokens that were unwound.
        """

        removed = self.winners_of(prize_id)
        self.winners_by_prize.pop(prize_id, None)
        if removed:
            # One occurrence per ledger entry; the same token may also have
            # won another prize when repeats are allowed.
            pending = list(removed)
            kept: list[str] = []
            for token in self.all_winners:
                if token in pending:
                    pending.remove(token)
                    continue
                kept.append(token)
            self.all_winners = kept
        return removed

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DrawState:
        return cls(
            number_pool=[str(n) for n in data.get("numberPool") or []],
            prize_remaining={str(k): int(v) for k, v in (data.get("prizeRemaining") or {}).items()},
            winners_by_prize={
                str(k): WinnerInfo.from_dict(v) for k, v in (data.get("winnersByPrize") or {}).items()
            },
            # Older state files predate cross-prize exclusion.
            all_winners=[str(n) for n in data.get("allWinners") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "numberPool": list(self.number_pool),
            "prizeRemaining": dict(self.prize_remaining),
            "winnersByPrize": {k: v.to_dict() for k, v in self.winners_by_prize.items()},
            "allWinners": list(self.all_winners),
        }
