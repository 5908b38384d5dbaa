"""Direct draw, reset and lottery overview routes. No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.control import DrawRequestSchema, ResetSchema
from luckydraw.utils.responses import ok


draw_bp = Blueprint("draw", __name__)

_request_schema = DrawRequestSchema()
_reset_schema = ResetSchema()


@draw_bp.post("/draw")
def draw_winners():
    """Draw without the rolling animation (bypasses the display session)."""

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    runtime = get_runtime()
    result = runtime.engine.draw(data["prize_id"], data["count"])
    runtime.session.publish_state()

    state = result.state.to_dict()
    return ok(
        {
            "winners": result.winners,
            "numberPool": state["numberPool"],
            "prizeRemaining": state["prizeRemaining"],
            "winnersByPrize": state["winnersByPrize"],
        }
    )


@draw_bp.post("/reset")
def reset():
    payload = request.get_json(silent=True) or {}
    data = _reset_schema.load(payload)

    prize_id = data.get("prize_id")
    state = get_runtime().session.reset(prize_id).to_dict()
    if prize_id:
        return ok({**state, "resetPrizeId": prize_id})
    return ok({**state, "totalNumbers": len(state["numberPool"])})


@draw_bp.get("/lottery")
def lottery_overview():
    runtime = get_runtime()
    state, total = runtime.pool.ensure_initialized()
    rounds = runtime.catalog.list_rounds()
    return ok({"rounds": [r.to_dict() for r in rounds], **state.to_dict(), "totalNumbers": total})
