"""Collection document models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pycivmap.models._base import CivMapBaseModel
from pycivmap.models.feature import Feature


class CollectionInfo(CivMapBaseModel):
    """The ``info`` block of a collection document."""

    version: str


class Collection(CivMapBaseModel):
    """A versioned bundle of features and filters.

    Filters are kept as opaque mappings; they are carried along but not
    applied to the store.
    """

    version: str
    features: tuple[Feature, ...] = ()
    filters: tuple[dict[str, Any], ...] = Field(default=())
