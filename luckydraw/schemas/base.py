"""Shared schema base."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema


class RequestSchema(Schema):
    """Request bodies ignore keys they do not know about.

    The browser clients post whole state objects back, not just the fields a
    given endpoint reads.
    """

    class Meta:
        unknown = EXCLUDE
