"""Draw control routes for the operator console. No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.control import DisplayPatchSchema, QRCodeSchema, StartRollingSchema
from luckydraw.utils.responses import ok

control_bp = Blueprint("control", __name__)

_start_schema = StartRollingSchema()
_patch_schema = DisplayPatchSchema()
_qrcode_schema = QRCodeSchema()


def _register_url() -> str:
    proto = request.headers.get("X-Forwarded-Proto") or request.scheme
    return f"{proto}://{request.host}/register"


@control_bp.get("/control/state")
def get_state():
    return ok(get_runtime().session.full_state())


@control_bp.post("/control/state")
def patch_state():
    payload = request.get_json(silent=True) or {}
    data = _patch_schema.load(payload)

    return ok(get_runtime().session.apply(data))


@control_bp.post("/control/start")
def start_rolling():
    payload = request.get_json(silent=True) or {}
    data = _start_schema.load(payload)

    get_runtime().session.start(prize_id=data["prize_id"], count=data["count"])
    return ok({"success": True})


@control_bp.post("/control/stop")
def stop_rolling():
    result = get_runtime().session.stop()
    state = result.state.to_dict()
    return ok(
        {
            "winners": result.winners,
            "prizeRemaining": state["prizeRemaining"],
            "winnersByPrize": state["winnersByPrize"],
            "numberPool": state["numberPool"],
        }
    )


@control_bp.get("/control/qrcode")
def get_qrcode():
    session = get_runtime().session.current()
    return ok({"showQRCode": session.show_qrcode, "qrCodeMessage": session.qrcode_message})


@control_bp.post("/control/qrcode")
def toggle_qrcode():
    payload = request.get_json(silent=True) or {}
    data = _qrcode_schema.load(payload)

    url = _register_url()
    session = get_runtime().session.set_qrcode(data.get("show"), data.get("message"), url)
    return ok(
        {
            "success": True,
            "showQRCode": session.show_qrcode,
            "registerUrl": url,
            "qrCodeMessage": session.qrcode_message,
        }
    )
