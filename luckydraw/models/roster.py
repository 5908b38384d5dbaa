"""Live check-in roster (``live-pool.json``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass
class LiveRoster:
    is_open: bool = False
    registrations: list[str] = field(default_factory=list)
    cleared_at: int = 0  # epoch millis of the last clear

    def remove(self, tokens: Iterable[str]) -> None:
        drop = set(tokens)
        self.registrations = [r for r in self.registrations if r not in drop]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LiveRoster:
        seen: set[str] = set()
        registrations: list[str] = []
        for raw in data.get("registrations") or []:
            token = str(raw)
            if token not in seen:
                seen.add(token)
                registrations.append(token)
        return cls(
            is_open=bool(data.get("isOpen", False)),
            registrations=registrations,
            cleared_at=int(data.get("clearedAt") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "isOpen": self.is_open,
            "registrations": list(self.registrations),
            "clearedAt": self.cleared_at,
        }
