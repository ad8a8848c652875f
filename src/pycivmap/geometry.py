"""Viewport geometry helpers.

Viewports are circles (center + radius) in ``x``/``z`` block coordinates.
Rectangular bounds are ``((north, west), (south, east))`` which in block
space is ``((min_z, min_x), (max_z, max_x))``. A circle maps to the square
that encloses it, and bounds map back to the smallest such circle.
"""

from __future__ import annotations

from collections.abc import Iterable

from pycivmap._constants import DEFAULT_VIEW_RADIUS
from pycivmap.models import Bounds, ImageGeometry, MarkerGeometry, Point, PolygonGeometry, ViewportCircle
from pycivmap.models.geometry import Geometry


def circle_to_bounds(circle: ViewportCircle) -> Bounds:
    """Return the square bounds enclosing *circle*."""
    r = circle.radius
    return ((circle.z - r, circle.x - r), (circle.z + r, circle.x + r))


def bounds_to_circle(bounds: Bounds) -> ViewportCircle:
    """Return the smallest circle whose enclosing square covers *bounds*."""
    (n, w), (s, e) = bounds
    north, south = min(n, s), max(n, s)
    west, east = min(w, e), max(w, e)
    return ViewportCircle(
        x=(west + east) / 2,
        z=(north + south) / 2,
        radius=max(east - west, south - north) / 2,
    )


def bounds_of_positions(positions: Iterable[Point]) -> Bounds:
    """Axis-aligned bounds of a sequence of ``(z, x)`` points."""
    points = list(positions)
    if not points:
        raise ValueError("cannot compute bounds of an empty position list")
    zs = [z for z, _ in points]
    xs = [x for _, x in points]
    return ((min(zs), min(xs)), (max(zs), max(xs)))


def circle_bounds_from_geometry(geometry: Geometry) -> ViewportCircle:
    """Viewport circle covering *geometry*.

    A marker has no extent, so it is centered with the default view radius.

    Raises
    ------
    TypeError
        For a geometry variant this function does not know.
    """
    match geometry:
        case MarkerGeometry(position=(z, x)):
            return ViewportCircle(x=x, z=z, radius=DEFAULT_VIEW_RADIUS)
        case PolygonGeometry(positions=positions):
            return bounds_to_circle(bounds_of_positions(positions))
        case ImageGeometry(bounds=bounds):
            return bounds_to_circle(bounds)
        case _:
            raise TypeError(f"Unhandled geometry variant: {type(geometry).__name__}")
