"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from luckydraw.runtime import get_runtime
from luckydraw.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Liveness plus the number of connected display clients."""

    return ok({"status": "ok", "displayClients": get_runtime().hub.client_count})
