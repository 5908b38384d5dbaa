"""Shared fixtures for the test suite."""

from __future__ import annotations

import random
from typing import Any

from luckydraw.models import Catalog, DrawState, LiveRoster, LotteryConfig, PoolType, Prize, Round
from luckydraw.runtime import Runtime, build_runtime
from luckydraw.services.broadcast_hub import BroadcastHub


class RecordingEmitter:
    """Collects what the hub would have sent over the wire."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[tuple[dict[str, Any], str]] = []
        self.fail_for = fail_for or set()

    def __call__(self, envelope: dict[str, Any], sid: str) -> None:
        if sid in self.fail_for:
            raise ConnectionError(f"client {sid} is gone")
        self.sent.append((envelope, sid))

    def types_for(self, sid: str) -> list[str]:
        return [env["type"] for env, to in self.sent if to == sid]


def make_runtime(data_dir: str, seed: int = 1234) -> tuple[Runtime, RecordingEmitter]:
    emitter = RecordingEmitter()
    hub = BroadcastHub(emitter)
    hub.register("display-1")
    runtime = build_runtime(data_dir, hub=hub, rng=random.Random(seed))
    return runtime, emitter


def seed(
    runtime: Runtime,
    *,
    pool: list[str] | None = None,
    pool_type: PoolType = PoolType.PRESET,
    prizes: list[tuple[str, int]] | None = None,
    allow_repeat_win: bool = False,
    roster: list[str] | None = None,
    calibration: dict[str, list[str]] | None = None,
) -> None:
    """Write a one-round catalog plus matching state/config/roster documents."""

    prizes = prizes if prizes is not None else [("1-1", 2)]
    rnd = Round(
        id=1,
        name="Round 1",
        pool_type=pool_type,
        prizes=[Prize(id=pid, level=f"L{pid}", name=f"Prize {pid}", quantity=qty) for pid, qty in prizes],
    )
    runtime.catalog_repository.save(Catalog(rounds=[rnd]))
    runtime.state_repository.save(
        DrawState(
            number_pool=list(pool if pool is not None else ["001", "002", "003"]),
            prize_remaining={pid: qty for pid, qty in prizes},
        )
    )
    config = LotteryConfig(allow_repeat_win=allow_repeat_win)
    if calibration:
        config.calibration = {k: list(v) for k, v in calibration.items()}
    runtime.config_repository.save(config)
    runtime.roster_repository.save(LiveRoster(is_open=True, registrations=list(roster or [])))
