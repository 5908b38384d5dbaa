"""Schemas for round and prize admin requests."""

from __future__ import annotations

from marshmallow import fields, validate

from luckydraw.schemas.base import RequestSchema

_POOL_TYPES = validate.OneOf(["preset", "live"])


class RoundCreateSchema(RequestSchema):
    name = fields.String(required=True, validate=validate.Length(min=1))
    pool_type = fields.String(data_key="poolType", load_default="preset", validate=_POOL_TYPES)


class RoundUpdateSchema(RequestSchema):
    name = fields.String(validate=validate.Length(min=1))
    pool_type = fields.String(data_key="poolType", validate=_POOL_TYPES)


class PrizeCreateSchema(RequestSchema):
    round_id = fields.Integer(data_key="roundId", required=True, strict=True)
    level = fields.String(required=True, validate=validate.Length(min=1))
    name = fields.String(required=True, validate=validate.Length(min=1))
    quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=0))
    color = fields.String(load_default=None, allow_none=True)
    sponsor = fields.String(load_default=None, allow_none=True)
    image = fields.String(load_default=None, allow_none=True)


class PrizeUpdateSchema(RequestSchema):
    """Every field optional; ``image: ""`` or ``null`` clears the image."""

    level = fields.String()
    name = fields.String()
    quantity = fields.Integer(strict=True, validate=validate.Range(min=0))
    color = fields.String()
    sponsor = fields.String(allow_none=True)
    image = fields.String(allow_none=True)
