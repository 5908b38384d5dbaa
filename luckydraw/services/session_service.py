"""Display session state machine: Idle -> Armed -> Rolling -> Armed.

The session is owned by this service and only changes through the transition
methods below. Every transition runs under the process-wide lock shared with
the draw engine, so Stop-then-draw is a single critical section.
"""

from __future__ import annotations

import copy
import logging
from threading import RLock
from typing import Any

from luckydraw.errors import AppError, NotFoundError, StateConflictError, ValidationError
from luckydraw.models import Catalog, DisplaySession, DrawState, SessionPhase
from luckydraw.repositories import CatalogRepository, DrawStateRepository
from luckydraw.services.broadcast_hub import BroadcastHub
from luckydraw.services.draw_engine import POOL_EMPTY, QUOTA_REACHED, DrawEngine, DrawResult
from luckydraw.services.pool_resolver import PoolResolver, locate_prize
from luckydraw.services.snapshot import SnapshotBuilder

logger = logging.getLogger(__name__)


class SessionService:
    """Owns the volatile :class:`DisplaySession`."""

    def __init__(
        self,
        engine: DrawEngine,
        resolver: PoolResolver,
        catalog_repository: CatalogRepository,
        state_repository: DrawStateRepository,
        snapshot: SnapshotBuilder,
        hub: BroadcastHub,
        lock: RLock,
    ) -> None:
        self._engine = engine
        self._resolver = resolver
        self._catalog = catalog_repository
        self._state = state_repository
        self._snapshot = snapshot
        self._hub = hub
        self._lock = lock
        self._session = DisplaySession()

    # -- reads -------------------------------------------------------------

    def current(self) -> DisplaySession:
        """A copy of the session; mutating it has no effect."""

        with self._lock:
            return copy.deepcopy(self._session)

    @property
    def phase(self) -> SessionPhase:
        with self._lock:
            return self._session.phase

    def full_state(self) -> dict[str, Any]:
        with self._lock:
            return self._snapshot.build(self._session)

    def publish_state(self) -> dict[str, Any]:
        with self._lock:
            snapshot = self._snapshot.build(self._session)
            self._hub.state_update(snapshot)
            return snapshot

    # -- arming ------------------------------------------------------------

    def _ensure_not_rolling(self, action: str) -> None:
        if self._session.is_rolling:
            raise StateConflictError(message=f"Cannot {action} while rolling")

    @staticmethod
    def _set_round(session: DisplaySession, catalog: Catalog, round_id: int) -> None:
        rnd = catalog.find_round(round_id)
        if rnd is None:
            raise NotFoundError(message="Round not found", details={"roundId": round_id})
        session.current_round_id = rnd.id
        prize_id = session.current_prize_id
        if prize_id and rnd.find_prize(prize_id) is None:
            session.current_prize_id = None

    @staticmethod
    def _set_prize(session: DisplaySession, catalog: Catalog, prize_id: str | None) -> None:
        if not prize_id:
            session.current_prize_id = None
            return
        rnd, prize = locate_prize(catalog, prize_id)
        session.current_round_id = rnd.id
        session.current_prize_id = prize.id

    @staticmethod
    def _set_count(session: DisplaySession, count: int) -> None:
        if int(count) < 1:
            raise ValidationError(message="Invalid count", details={"count": ["Must be >= 1"]})
        session.draw_count = int(count)

    def select_round(self, round_id: int) -> None:
        with self._lock:
            self._ensure_not_rolling("change round")
            self._set_round(self._session, self._catalog.load(), round_id)

    def select_prize(self, prize_id: str | None) -> None:
        with self._lock:
            self._ensure_not_rolling("change prize")
            self._set_prize(self._session, self._catalog.load(), prize_id)

    def set_count(self, count: int) -> None:
        with self._lock:
            self._ensure_not_rolling("change count")
            self._set_count(self._session, count)

    def apply(self, patch: dict[str, Any]) -> dict[str, Any]:
        """Apply a control-console patch and broadcast the result.

        Recognised keys: ``current_round_id``, ``current_prize_id``,
        ``draw_count``, ``winners``. The patch is applied to a copy and only
        committed when every key is valid.
        """

        with self._lock:
            self._ensure_not_rolling("update state")
            catalog = self._catalog.load()
            staged = copy.deepcopy(self._session)
            if "draw_count" in patch:
                self._set_count(staged, int(patch["draw_count"]))
            if "current_round_id" in patch:
                self._set_round(staged, catalog, int(patch["current_round_id"]))
            if "current_prize_id" in patch:
                self._set_prize(staged, catalog, patch["current_prize_id"])
            if "winners" in patch:
                staged.winners = [str(w) for w in patch["winners"] or []]
            self._session = staged
            return self.publish_state()

    # -- rolling -----------------------------------------------------------

    def start(self, prize_id: str, count: int) -> DisplaySession:
        """Arm ``prize_id``/``count`` and enter Rolling if anything can win."""

        with self._lock:
            if self._session.is_rolling:
                raise StateConflictError(message="Already rolling")
            staged = copy.deepcopy(self._session)
            self._set_prize(staged, self._catalog.load(), prize_id)
            self._set_count(staged, count)
            self._session = staged

            state = self._state.load()
            remaining = int(state.prize_remaining.get(prize_id, 0))
            if remaining <= 0:
                raise StateConflictError(message=QUOTA_REACHED, details={"prizeId": prize_id})
            candidates = self._resolver.resolve_candidates(prize_id)
            if not candidates:
                raise StateConflictError(message=POOL_EMPTY, details={"prizeId": prize_id})

            self._session.rolling_pool = candidates
            self._session.winners = []
            self._session.is_rolling = True
            logger.info("Rolling started for prize %s (count=%d, pool=%d)", prize_id, count, len(candidates))

            self._hub.rolling_start(self._session.draw_count, prize_id)
            return copy.deepcopy(self._session)

    def stop(self) -> DrawResult:
        """Leave Rolling by drawing from the frozen pool."""

        with self._lock:
            if not self._session.is_rolling or not self._session.current_prize_id:
                raise StateConflictError(message="Not rolling")

            prize_id = self._session.current_prize_id
            try:
                result = self._engine.draw(
                    prize_id,
                    self._session.draw_count,
                    restrict_to=self._session.rolling_pool,
                )
            except AppError:
                self._session.is_rolling = False
                self._session.rolling_pool = None
                self._session.winners = []
                logger.warning("Stop for prize %s failed, back to armed", prize_id)
                self.publish_state()
                raise

            self._session.is_rolling = False
            self._session.rolling_pool = None
            self._session.winners = list(result.winners)

            self._hub.rolling_stop(result.winners)
            self.publish_state()
            return result

    # -- reset & overlays --------------------------------------------------

    def reset(self, prize_id: str | None = None) -> DrawState:
        with self._lock:
            self._ensure_not_rolling("reset")
            state = self._engine.reset(prize_id)
            if not prize_id or self._session.current_prize_id == prize_id:
                self._session.winners = []
            if not prize_id:
                self._hub.reset()
            self.publish_state()
            return state

    def set_qrcode(self, show: bool | None, message: str | None, url: str) -> DisplaySession:
        """Show/hide the registration QR overlay; omitted values toggle/keep."""

        with self._lock:
            self._session.show_qrcode = (not self._session.show_qrcode) if show is None else bool(show)
            if message is not None:
                self._session.qrcode_message = message.strip()
            self._hub.show_qrcode(self._session.show_qrcode, url, self._session.qrcode_message)
            return copy.deepcopy(self._session)
