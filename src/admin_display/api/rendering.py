"""Serialize shape trees into the JSON documents returned by the admin API."""

from __future__ import annotations

from fastapi.encoders import jsonable_encoder

from admin_display.api.schemas import ShapeSchema
from admin_display.core.results import Shape


def render_shape(shape: Shape) -> ShapeSchema:
    return ShapeSchema(
        type=shape.shape_type,
        prefix=shape.prefix,
        position=shape.position,
        model=jsonable_encoder(shape.model),
        zones={name: [render_shape(child) for child in zone.shapes] for name, zone in shape.zones.items()},
    )
