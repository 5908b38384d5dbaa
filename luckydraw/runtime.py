"""Process-wide service container.

Builds the repositories, the shared lock and every service once per app, and
exposes them to request handlers through ``get_runtime()``.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from threading import RLock

from flask import Flask, current_app

from luckydraw.repositories import CatalogRepository, ConfigRepository, DrawStateRepository, RosterRepository
from luckydraw.services.broadcast_hub import BroadcastHub
from luckydraw.services.catalog_service import CatalogService
from luckydraw.services.config_service import ConfigService
from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.number_pool_service import NumberPoolService
from luckydraw.services.pool_resolver import PoolResolver
from luckydraw.services.roster_service import RosterService
from luckydraw.services.session_service import SessionService
from luckydraw.services.snapshot import SnapshotBuilder

EXTENSION_KEY = "luckydraw"


@dataclass
class Runtime:
    lock: RLock
    hub: BroadcastHub
    catalog_repository: CatalogRepository
    state_repository: DrawStateRepository
    config_repository: ConfigRepository
    roster_repository: RosterRepository
    resolver: PoolResolver
    engine: DrawEngine
    session: SessionService
    catalog: CatalogService
    pool: NumberPoolService
    roster: RosterService
    settings: ConfigService


def build_runtime(
    data_dir: str | os.PathLike[str],
    hub: BroadcastHub | None = None,
    rng: random.Random | None = None,
) -> Runtime:
    """Wire all services over the JSON files in ``data_dir``."""

    lock = RLock()
    hub = hub or BroadcastHub()

    catalog_repository = CatalogRepository(data_dir)
    state_repository = DrawStateRepository(data_dir)
    config_repository = ConfigRepository(data_dir)
    roster_repository = RosterRepository(data_dir)

    resolver = PoolResolver(catalog_repository, state_repository, config_repository, roster_repository)
    engine = DrawEngine(
        catalog_repository,
        state_repository,
        config_repository,
        roster_repository,
        lock=lock,
        rng=rng,
    )
    session = SessionService(
        engine,
        resolver,
        catalog_repository,
        state_repository,
        SnapshotBuilder(catalog_repository, state_repository, config_repository),
        hub,
        lock,
    )
    notify = session.publish_state

    return Runtime(
        lock=lock,
        hub=hub,
        catalog_repository=catalog_repository,
        state_repository=state_repository,
        config_repository=config_repository,
        roster_repository=roster_repository,
        resolver=resolver,
        engine=engine,
        session=session,
        catalog=CatalogService(catalog_repository, state_repository, lock, notify=notify),
        pool=NumberPoolService(state_repository, config_repository, catalog_repository, lock, notify=notify),
        roster=RosterService(roster_repository, config_repository, lock, notify=notify),
        settings=ConfigService(config_repository, lock, notify=notify),
    )


def init_runtime(app: Flask) -> Runtime:
    """Create the app's runtime and register it as a Flask extension."""

    runtime = build_runtime(str(app.config["DATA_DIR"]))
    app.extensions[EXTENSION_KEY] = runtime
    return runtime


def get_runtime() -> Runtime:
    """Get the runtime of the current app."""

    runtime: Runtime | None = current_app.extensions.get(EXTENSION_KEY)
    if runtime is None:
        raise RuntimeError("Runtime not initialized")
    return runtime
