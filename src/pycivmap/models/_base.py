"""Base model and shared coordinate types.

All records handed to the state store inherit from :class:`CivMapBaseModel`
which makes them frozen value objects: the store owns their lifecycle and
replaces rather than mutates them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

Point = tuple[float, float]
"""A map position in ``(z, x)`` order (north-south first)."""

Bounds = tuple[Point, Point]
"""Opposite corners ``((north, west), (south, east))``."""


class CivMapBaseModel(BaseModel):
    """Base for every pycivmap record.

    * frozen, so ids and geometry variants cannot change after creation
    * unknown keys from third-party documents are ignored
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
