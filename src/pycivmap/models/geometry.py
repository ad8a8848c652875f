"""Feature geometry variants.

Geometry is a closed union discriminated by ``type``; consumers match it
exhaustively (see :func:`pycivmap.geometry.circle_bounds_from_geometry`).
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from pycivmap.models._base import Bounds, CivMapBaseModel, Point


class MarkerGeometry(CivMapBaseModel):
    """A single point."""

    type: Literal["marker"] = "marker"
    position: Point


class PolygonGeometry(CivMapBaseModel):
    """An ordered ring of points (not explicitly closed)."""

    type: Literal["polygon"] = "polygon"
    positions: tuple[Point, ...] = Field(..., min_length=1)


class ImageGeometry(CivMapBaseModel):
    """A raster image stretched over a rectangle."""

    type: Literal["image"] = "image"
    url: str
    bounds: Bounds


Geometry = Annotated[MarkerGeometry | PolygonGeometry | ImageGeometry, Field(discriminator="type")]
