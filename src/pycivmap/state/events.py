"""Store update records.

Every path that changes application state (fragment loads, dropped files,
remote collections) expresses the change as one of these records. Only a
:class:`pycivmap.state.store.StatePort` is allowed to apply them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from pycivmap.models import Bounds, Feature


class UpdateKind(StrEnum):
    SET_BASEMAP = "set-basemap"
    SET_VIEWPORT = "set-viewport"
    LOAD_FEATURES = "load-features"
    ADD_FEATURE = "add-feature"
    SELECT_FEATURE = "select-feature"


class _Update(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SetBasemap(_Update):
    kind: Literal[UpdateKind.SET_BASEMAP] = UpdateKind.SET_BASEMAP
    basemap: str


class SetViewport(_Update):
    kind: Literal[UpdateKind.SET_VIEWPORT] = UpdateKind.SET_VIEWPORT
    bounds: Bounds


class LoadFeatures(_Update):
    """A batch of features that downstream consumers see as one atomic set."""

    kind: Literal[UpdateKind.LOAD_FEATURES] = UpdateKind.LOAD_FEATURES
    features: tuple[Feature, ...]


class AddFeature(_Update):
    kind: Literal[UpdateKind.ADD_FEATURE] = UpdateKind.ADD_FEATURE
    feature: Feature


class SelectFeature(_Update):
    kind: Literal[UpdateKind.SELECT_FEATURE] = UpdateKind.SELECT_FEATURE
    feature_id: str = Field(..., min_length=1)


StoreUpdate = Annotated[
    SetBasemap | SetViewport | LoadFeatures | AddFeature | SelectFeature,
    Field(discriminator="kind"),
]
