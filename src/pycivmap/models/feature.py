"""Feature model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pycivmap.models._base import CivMapBaseModel
from pycivmap.models.geometry import Geometry


class Feature(CivMapBaseModel):
    """One annotated map entity.

    Parameters
    ----------
    id : str
        Unique within a session. Importers derive it from the source
        (coordinates, names, a source-tag prefix) so re-importing the same
        file produces the same ids.
    geometry : Geometry
        Exactly one of marker, polygon or image.
    properties : dict
        Flat mapping of primitive values, including provenance flags such
        as ``is_waypoint`` or ``from_snitchmaster``.
    style : dict or None
        Rendering hints, only present when the source format encodes them.
    """

    id: str
    geometry: Geometry
    properties: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, Any] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value:
            raise ValueError("feature id must be non-empty")
        return value
