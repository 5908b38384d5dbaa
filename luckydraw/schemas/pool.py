"""Schemas for number pool admin requests."""

from __future__ import annotations

from marshmallow import ValidationError, fields, validates_schema

from luckydraw.schemas.base import RequestSchema


class PoolSetSchema(RequestSchema):
    numbers = fields.List(fields.Raw(), required=True)

    @validates_schema
    def _validate_tokens(self, data, **kwargs):  # type: ignore[no-untyped-def]
        bad = [n for n in data.get("numbers") or [] if not isinstance(n, (str, int)) or isinstance(n, bool)]
        if bad:
            raise ValidationError({"numbers": ["Numbers must be strings or integers"]})


class PoolGenerateSchema(RequestSchema):
    start = fields.Integer(strict=True, load_default=None, allow_none=True)
    end = fields.Integer(strict=True, load_default=None, allow_none=True)
    exclude_contains = fields.List(fields.String(), data_key="excludeContains", load_default=None, allow_none=True)
    exclude_exact = fields.List(fields.String(), data_key="excludeExact", load_default=None, allow_none=True)
    # Older admin pages send excludePatterns; it means excludeContains.
    exclude_patterns = fields.List(fields.String(), data_key="excludePatterns", load_default=None, allow_none=True)


class PoolImportSchema(RequestSchema):
    csv = fields.String(required=True)
