"""Service layer for rounds and prizes."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable

from luckydraw.errors import NotFoundError, ValidationError
from luckydraw.models import Catalog, DrawState, PoolType, Prize, Round
from luckydraw.models.catalog import DEFAULT_PRIZE_COLOR
from luckydraw.repositories import CatalogRepository, DrawStateRepository

logger = logging.getLogger(__name__)


def _pool_type(raw: str | None) -> PoolType:
    try:
        return PoolType(raw or PoolType.PRESET.value)
    except ValueError as exc:
        raise ValidationError(
            message="Invalid poolType",
            details={"poolType": ["Must be one of preset|live"]},
        ) from exc


class CatalogService:
    """Round/prize use-cases, including the draw-state cascade on delete."""

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        state_repository: DrawStateRepository,
        lock: RLock,
        notify: Callable[[], Any] | None = None,
    ) -> None:
        self._catalog = catalog_repository
        self._state = state_repository
        self._lock = lock
        self._notify = notify

    def _changed(self) -> None:
        if self._notify is not None:
            self._notify()

    @staticmethod
    def _require_round(catalog: Catalog, round_id: int) -> Round:
        rnd = catalog.find_round(round_id)
        if rnd is None:
            raise NotFoundError(message="Round not found", details={"roundId": round_id})
        return rnd

    # -- rounds ------------------------------------------------------------

    def list_rounds(self) -> list[Round]:
        return self._catalog.load().rounds

    def create_round(self, name: str, pool_type: str | None = None) -> Round:
        with self._lock:
            catalog = self._catalog.load()
            rnd = Round(id=catalog.next_round_id(), name=name, pool_type=_pool_type(pool_type))
            catalog.rounds.append(rnd)
            self._catalog.save(catalog)
            logger.info("Created round %d (%s)", rnd.id, rnd.pool_type.value)
            self._changed()
            return rnd

    def update_round(self, round_id: int, name: str | None = None, pool_type: str | None = None) -> Round:
        with self._lock:
            catalog = self._catalog.load()
            rnd = self._require_round(catalog, round_id)
            if name:
                rnd.name = name
            if pool_type:
                rnd.pool_type = _pool_type(pool_type)
            self._catalog.save(catalog)
            self._changed()
            return rnd

    def delete_round(self, round_id: int) -> None:
        with self._lock:
            catalog = self._catalog.load()
            rnd = self._require_round(catalog, round_id)
            catalog.rounds.remove(rnd)
            self._catalog.save(catalog)

            state = self._state.load()
            for prize in rnd.prizes:
                self._forget(state, prize.id)
            self._state.save(state)
            logger.info("Deleted round %d with %d prizes", round_id, len(rnd.prizes))
            self._changed()

    # -- prizes ------------------------------------------------------------

    def list_prizes(self, round_id: int | None = None) -> list[dict[str, Any]]:
        catalog = self._catalog.load()
        if round_id is not None:
            return [p.to_dict() for p in self._require_round(catalog, round_id).prizes]
        return [
            {**p.to_dict(), "roundId": rnd.id, "roundName": rnd.name}
            for rnd in catalog.rounds
            for p in rnd.prizes
        ]

    def create_prize(
        self,
        round_id: int,
        level: str,
        name: str,
        quantity: int,
        color: str | None = None,
        sponsor: str | None = None,
        image: str | None = None,
    ) -> Prize:
        with self._lock:
            catalog = self._catalog.load()
            rnd = self._require_round(catalog, round_id)
            prize = Prize(
                id=rnd.next_prize_id(),
                level=level,
                name=name,
                quantity=int(quantity),
                color=color or DEFAULT_PRIZE_COLOR,
                sponsor=sponsor or "",
                image=image or None,
            )
            rnd.prizes.append(prize)
            self._catalog.save(catalog)

            state = self._state.load()
            state.prize_remaining[prize.id] = prize.quantity
            self._state.save(state)
            logger.info("Created prize %s (quantity=%d)", prize.id, prize.quantity)
            self._changed()
            return prize

    def update_prize(self, prize_id: str, changes: dict[str, Any]) -> Prize:
        """Apply a partial update; the id never changes."""

        with self._lock:
            catalog = self._catalog.load()
            found = catalog.find_prize(prize_id)
            if found is None:
                raise NotFoundError(message="Prize not found", details={"prizeId": prize_id})
            _rnd, prize = found

            for key in ("level", "name", "color"):
                if changes.get(key):
                    setattr(prize, key, changes[key])
            if changes.get("sponsor") is not None:
                prize.sponsor = changes["sponsor"]
            if "image" in changes:
                prize.image = changes["image"] or None
            quantity_changed = changes.get("quantity") is not None and int(changes["quantity"]) != prize.quantity
            if quantity_changed:
                prize.quantity = int(changes["quantity"])
            self._catalog.save(catalog)

            if quantity_changed:
                state = self._state.load()
                drawn = len(state.winners_of(prize_id))
                state.prize_remaining[prize_id] = max(0, prize.quantity - drawn)
                self._state.save(state)

            self._changed()
            return prize

    def delete_prize(self, prize_id: str) -> None:
        with self._lock:
            catalog = self._catalog.load()
            found = catalog.find_prize(prize_id)
            if found is None:
                raise NotFoundError(message="Prize not found", details={"prizeId": prize_id})
            rnd, prize = found
            rnd.prizes.remove(prize)
            self._catalog.save(catalog)

            state = self._state.load()
            self._forget(state, prize_id)
            self._state.save(state)
            logger.info("Deleted prize %s", prize_id)
            self._changed()

    @staticmethod
    def _forget(state: DrawState, prize_id: str) -> None:
        state.prize_remaining.pop(prize_id, None)
        state.forget_prize(prize_id)
