"""Schemas for live roster check-in."""

from __future__ import annotations

from marshmallow import fields

from luckydraw.schemas.base import RequestSchema


class RegisterSchema(RequestSchema):
    employee_id = fields.String(data_key="employeeId", required=True)


class RegisterToggleSchema(RequestSchema):
    is_open = fields.Boolean(data_key="isOpen", required=True, truthy={True}, falsy={False})
