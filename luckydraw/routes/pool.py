"""Number pool admin routes (controllers). No business logic here."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request

from luckydraw.runtime import get_runtime
from luckydraw.schemas.pool import PoolGenerateSchema, PoolImportSchema, PoolSetSchema
from luckydraw.utils.responses import ok

pool_bp = Blueprint("pool", __name__)

_set_schema = PoolSetSchema()
_generate_schema = PoolGenerateSchema()
_import_schema = PoolImportSchema()


@pool_bp.get("/pool")
def get_pool():
    pool = get_runtime().pool.get_pool()
    return ok({"numberPool": pool, "count": len(pool)})


@pool_bp.post("/pool")
def set_pool():
    """Replace the pool manually; resets all draw state."""

    payload = request.get_json(silent=True) or {}
    data = _set_schema.load(payload)

    pool = get_runtime().pool.set_pool(data["numbers"])
    return ok({"numberPool": pool, "count": len(pool)})


@pool_bp.post("/pool/generate")
def generate_pool():
    payload = request.get_json(silent=True) or {}
    data = _generate_schema.load(payload)

    pool, pool_config = get_runtime().pool.generate(data)
    return ok({"numberPool": pool, "count": len(pool), "config": asdict(pool_config)})


@pool_bp.post("/pool/import")
def import_pool():
    payload = request.get_json(silent=True) or {}
    data = _import_schema.load(payload)

    pool = get_runtime().pool.import_csv(data["csv"])
    return ok({"numberPool": pool, "count": len(pool)})
