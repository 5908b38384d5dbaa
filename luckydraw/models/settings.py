"""Operator configuration (``config.json``).

One value type with explicit defaults. Older files that predate a section, or
use the legacy ``excludePatterns`` key, are migrated in :meth:`LotteryConfig.from_dict`
so read sites never need to fill in defaults themselves.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


def _merge(defaults: dict[str, Any], data: Any) -> dict[str, Any]:
    merged = dict(defaults)
    if isinstance(data, dict):
        merged.update({k: v for k, v in data.items() if k in defaults and v is not None})
    return merged


@dataclass
class NumberPoolConfig:
    type: str = "auto"  # "auto" | "manual"
    start: int = 1
    end: int = 300
    excludeContains: list[str] = field(default_factory=lambda: ["4", "13"])
    excludeExact: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> NumberPoolConfig:
        data = dict(data) if isinstance(data, dict) else {}
        legacy = data.pop("excludePatterns", None)
        if "excludeContains" not in data and legacy is not None:
            data["excludeContains"] = legacy
        values = _merge(asdict(cls()), data)
        return cls(
            type=str(values["type"]),
            start=int(values["start"]),
            end=int(values["end"]),
            excludeContains=[str(p) for p in values["excludeContains"]],
            excludeExact=[str(p) for p in values["excludeExact"]],
        )


@dataclass
class FontSizes:
    prizeLevel: int = 56
    prizeName: int = 42
    sponsor: int = 28
    numberCard: int = 38


@dataclass
class DisplaySettings:
    showQuantity: bool = True
    showSponsor: bool = True
    showNumberBorder: bool = True
    maskPhone: bool = False


@dataclass
class FontColors:
    prizeName: str = "#ffffff"
    sponsor: str = "#eeeeee"
    numberCard: str = "#ffd700"


@dataclass
class RegisterSettings:
    length: int = 6
    allowLetters: bool = False


@dataclass
class LotteryConfig:
    allow_repeat_win: bool = False
    numbers_per_row: int = 10
    number_pool: NumberPoolConfig = field(default_factory=NumberPoolConfig)
    font_sizes: FontSizes = field(default_factory=FontSizes)
    display_settings: DisplaySettings = field(default_factory=DisplaySettings)
    font_colors: FontColors = field(default_factory=FontColors)
    register_settings: RegisterSettings = field(default_factory=RegisterSettings)
    calibration: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LotteryConfig:
        calibration = data.get("calibration") or {}
        return cls(
            allow_repeat_win=bool(data.get("allowRepeatWin", False)),
            numbers_per_row=int(data.get("numbersPerRow") or 10),
            number_pool=NumberPoolConfig.from_dict(data.get("numberPoolConfig")),
            font_sizes=FontSizes(**_merge(asdict(FontSizes()), data.get("fontSizes"))),
            display_settings=DisplaySettings(**_merge(asdict(DisplaySettings()), data.get("displaySettings"))),
            font_colors=FontColors(**_merge(asdict(FontColors()), data.get("fontColors"))),
            register_settings=RegisterSettings(**_merge(asdict(RegisterSettings()), data.get("registerSettings"))),
            calibration={
                str(k): [str(n) for n in v]
                for k, v in calibration.items()
                if isinstance(v, list) and v
            },
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "allowRepeatWin": self.allow_repeat_win,
            "numbersPerRow": self.numbers_per_row,
            "numberPoolConfig": asdict(self.number_pool),
            "fontSizes": asdict(self.font_sizes),
            "displaySettings": asdict(self.display_settings),
            "fontColors": asdict(self.font_colors),
            "registerSettings": asdict(self.register_settings),
        }
        # A fully consumed calibration leaves nothing behind in the file.
        if self.calibration:
            out["calibration"] = {k: list(v) for k, v in self.calibration.items()}
        return out

    def consume_calibration(self, prize_id: str, used: list[str]) -> bool:
        """Remove ``used`` tokens from the prize's calibration list.

        Returns True when the calibration map changed.
        """

        if not used or prize_id not in self.calibration:
            return False
        left = [n for n in self.calibration[prize_id] if n not in used]
        if left:
            self.calibration[prize_id] = left
        else:
            del self.calibration[prize_id]
        return True
