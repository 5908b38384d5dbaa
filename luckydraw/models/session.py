"""Volatile display session: what the big screen is showing right now."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SessionPhase(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    ROLLING = "rolling"


@dataclass
class DisplaySession:
    current_prize_id: str | None = None
    current_round_id: int = 1
    draw_count: int = 1
    is_rolling: bool = False
    winners: list[str] = field(default_factory=list)
    # Candidate set frozen at Start so the animation and the final draw agree.
    rolling_pool: list[str] | None = None
    show_qrcode: bool = False
    qrcode_message: str = ""

    @property
    def phase(self) -> SessionPhase:
        if self.is_rolling:
            return SessionPhase.ROLLING
        if self.current_prize_id:
            return SessionPhase.ARMED
        return SessionPhase.IDLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPrizeId": self.current_prize_id,
            "currentRoundId": self.current_round_id,
            "drawCount": self.draw_count,
            "isRolling": self.is_rolling,
            "winners": list(self.winners),
            "rollingPool": list(self.rolling_pool) if self.rolling_pool is not None else None,
            "showQRCode": self.show_qrcode,
            "qrCodeMessage": self.qrcode_message,
            "phase": self.phase.value,
        }
