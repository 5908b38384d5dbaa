"""Schemas for draw control, direct draws and resets."""

from __future__ import annotations

from marshmallow import fields, validate

from luckydraw.schemas.base import RequestSchema


class StartRollingSchema(RequestSchema):
    count = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    prize_id = fields.String(data_key="prizeId", required=True, validate=validate.Length(min=1))


class DrawRequestSchema(RequestSchema):
    prize_id = fields.String(data_key="prizeId", required=True, validate=validate.Length(min=1))
    count = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))


class DisplayPatchSchema(RequestSchema):
    current_round_id = fields.Integer(data_key="currentRoundId", strict=True)
    current_prize_id = fields.String(data_key="currentPrizeId", allow_none=True)
    draw_count = fields.Integer(data_key="drawCount", strict=True, validate=validate.Range(min=1))
    winners = fields.List(fields.String())


class QRCodeSchema(RequestSchema):
    show = fields.Boolean(load_default=None, allow_none=True)
    message = fields.String(load_default=None, allow_none=True)


class ResetSchema(RequestSchema):
    prize_id = fields.String(data_key="prizeId", load_default=None, allow_none=True)
