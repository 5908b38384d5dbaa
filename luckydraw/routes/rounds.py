"""Round admin routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.catalog import RoundCreateSchema, RoundUpdateSchema
from luckydraw.utils.responses import ok

rounds_bp = Blueprint("rounds", __name__)

_create_schema = RoundCreateSchema()
_update_schema = RoundUpdateSchema()


@rounds_bp.get("/rounds")
def list_rounds():
    rounds = get_runtime().catalog.list_rounds()
    return ok({"rounds": [r.to_dict() for r in rounds]})


@rounds_bp.post("/rounds")
def create_round():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    rnd = get_runtime().catalog.create_round(name=data["name"], pool_type=data["pool_type"])
    return ok({"round": rnd.to_dict()})


@rounds_bp.put("/rounds/<int:round_id>")
def update_round(round_id: int):
    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    rnd = get_runtime().catalog.update_round(
        round_id,
        name=data.get("name"),
        pool_type=data.get("pool_type"),
    )
    return ok({"round": rnd.to_dict()})


@rounds_bp.delete("/rounds/<int:round_id>")
def delete_round(round_id: int):
    get_runtime().catalog.delete_round(round_id)
    return ok({"success": True})
