"""Live roster check-in routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.register import RegisterSchema, RegisterToggleSchema
from luckydraw.utils.responses import ok

register_bp = Blueprint("register", __name__)

_register_schema = RegisterSchema()
_toggle_schema = RegisterToggleSchema()


@register_bp.get("/register")
def roster_status():
    return ok(get_runtime().roster.status())


@register_bp.post("/register")
def register():
    payload = request.get_json(silent=True) or {}
    data = _register_schema.load(payload)

    token = get_runtime().roster.register(data["employee_id"])
    return ok({"success": True, "message": "Registered", "employeeId": token})


@register_bp.put("/register")
def toggle_registration():
    payload = request.get_json(silent=True) or {}
    data = _toggle_schema.load(payload)

    get_runtime().roster.set_open(data["is_open"])
    return ok({"success": True, "isOpen": data["is_open"]})


@register_bp.delete("/register")
def clear_roster():
    get_runtime().roster.clear()
    return ok({"success": True})
