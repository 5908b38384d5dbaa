"""Config admin routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.config import ConfigUpdateSchema
from luckydraw.utils.responses import ok

settings_bp = Blueprint("settings", __name__)

_update_schema = ConfigUpdateSchema()


@settings_bp.get("/config")
def get_config():
    return ok({"config": get_runtime().settings.get().to_dict()})


@settings_bp.put("/config")
def update_config():
    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    config = get_runtime().settings.update(data)
    return ok({"config": config.to_dict()})
