"""Prize admin routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.errors import ValidationError
from luckydraw.runtime import get_runtime
from luckydraw.schemas.catalog import PrizeCreateSchema, PrizeUpdateSchema
from luckydraw.utils.responses import ok

prizes_bp = Blueprint("prizes", __name__)

_create_schema = PrizeCreateSchema()
_update_schema = PrizeUpdateSchema()


@prizes_bp.get("/prizes")
def list_prizes():
    """List prizes, optionally only those of ``?roundId=``."""

    raw_round = (request.args.get("roundId") or "").strip()
    round_id: int | None = None
    if raw_round:
        try:
            round_id = int(raw_round)
        except ValueError as e:
            raise ValidationError("roundId must be an integer") from e

    prizes = get_runtime().catalog.list_prizes(round_id)
    return ok({"prizes": prizes})


@prizes_bp.post("/prizes")
def create_prize():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    prize = get_runtime().catalog.create_prize(
        round_id=data["round_id"],
        level=data["level"],
        name=data["name"],
        quantity=data["quantity"],
        color=data.get("color"),
        sponsor=data.get("sponsor"),
        image=data.get("image"),
    )
    return ok({"prize": prize.to_dict()})


@prizes_bp.put("/prizes/<prize_id>")
def update_prize(prize_id: str):
    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    prize = get_runtime().catalog.update_prize(prize_id, data)
    return ok({"prize": prize.to_dict()})


@prizes_bp.delete("/prizes/<prize_id>")
def delete_prize(prize_id: str):
    get_runtime().catalog.delete_prize(prize_id)
    return ok({"success": True})
