"""View state carried in a URL fragment."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from pycivmap._constants import DEFAULT_VIEW_RADIUS
from pycivmap.models._base import CivMapBaseModel
from pycivmap.models.feature import Feature


class ViewportCircle(CivMapBaseModel):
    """Visible map region as a circle; see :func:`pycivmap.geometry.circle_to_bounds`."""

    x: float
    z: float
    radius: float = Field(..., ge=0)


class UrlState(CivMapBaseModel):
    """State parsed from one fragment.

    Built per parse and discarded after a single orchestration run.

    Parameters
    ----------
    basemap : str or None
        Basemap id (``b=`` or ``t=``).
    viewport : ViewportCircle or None
        Explicit view (``c=`` or a legacy ``x/z/zoom`` link).
    marker : bool
        ``c=`` omitted the radius: show a marker at the view center.
        Requires *viewport* with the default radius of 100.
    collection_url : str or None
        Remote collection to fetch (``u=``).
    feature_id : str or None
        Feature to select (``f=``).
    feature : Feature or None
        Inline feature (``feature=``); becomes the selected feature.
    collection : dict or None
        Inline collection document (``collection=``), validated when loaded.
    """

    basemap: str | None = None
    viewport: ViewportCircle | None = None
    marker: bool = False
    collection_url: str | None = None
    feature_id: str | None = None
    feature: Feature | None = None
    collection: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_viewport(self) -> UrlState:
        # Only states the segment grammar can write are representable.
        if self.viewport is not None and self.viewport.radius <= 0:
            raise ValueError("viewport radius must be positive")
        if self.marker and (self.viewport is None or self.viewport.radius != DEFAULT_VIEW_RADIUS):
            raise ValueError(f"marker requires a viewport with the default radius {DEFAULT_VIEW_RADIUS}")
        return self
