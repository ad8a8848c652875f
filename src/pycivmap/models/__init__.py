"""Data models for features, collections and view state."""

from pycivmap.models._base import Bounds, CivMapBaseModel, Point
from pycivmap.models.collection import Collection, CollectionInfo
from pycivmap.models.feature import Feature
from pycivmap.models.geometry import Geometry, ImageGeometry, MarkerGeometry, PolygonGeometry
from pycivmap.models.url_state import UrlState, ViewportCircle

__all__ = [
    "Bounds",
    "CivMapBaseModel",
    "Collection",
    "CollectionInfo",
    "Feature",
    "Geometry",
    "ImageGeometry",
    "MarkerGeometry",
    "Point",
    "PolygonGeometry",
    "UrlState",
    "ViewportCircle",
]
