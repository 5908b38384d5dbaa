"""Schema for partial config updates.

Field names mirror the stored document so the loaded dict can be merged as is.
"""

from __future__ import annotations

from marshmallow import fields, validate

from luckydraw.schemas.base import RequestSchema


class NumberPoolConfigSchema(RequestSchema):
    type = fields.String(validate=validate.OneOf(["auto", "manual"]))
    start = fields.Integer(strict=True)
    end = fields.Integer(strict=True)
    excludeContains = fields.List(fields.String())
    excludeExact = fields.List(fields.String())
    excludePatterns = fields.List(fields.String())


class FontSizesSchema(RequestSchema):
    prizeLevel = fields.Integer(validate=validate.Range(min=1))
    prizeName = fields.Integer(validate=validate.Range(min=1))
    sponsor = fields.Integer(validate=validate.Range(min=1))
    numberCard = fields.Integer(validate=validate.Range(min=1))


class DisplaySettingsSchema(RequestSchema):
    showQuantity = fields.Boolean()
    showSponsor = fields.Boolean()
    showNumberBorder = fields.Boolean()
    maskPhone = fields.Boolean()


class FontColorsSchema(RequestSchema):
    prizeName = fields.String()
    sponsor = fields.String()
    numberCard = fields.String()


class RegisterSettingsSchema(RequestSchema):
    length = fields.Integer(strict=True, validate=validate.Range(min=1, max=64))
    allowLetters = fields.Boolean()


class ConfigUpdateSchema(RequestSchema):
    allowRepeatWin = fields.Boolean()
    numbersPerRow = fields.Integer(strict=True, validate=validate.Range(min=1))
    numberPoolConfig = fields.Nested(NumberPoolConfigSchema)
    fontSizes = fields.Nested(FontSizesSchema)
    displaySettings = fields.Nested(DisplaySettingsSchema)
    fontColors = fields.Nested(FontColorsSchema)
    registerSettings = fields.Nested(RegisterSettingsSchema)
    calibration = fields.Dict(keys=fields.String(), values=fields.List(fields.String()), allow_none=True)
