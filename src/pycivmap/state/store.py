"""State port protocol and the in-memory reference store."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from pycivmap.models import Bounds, Feature
from pycivmap.state.events import (
    AddFeature,
    LoadFeatures,
    SelectFeature,
    SetBasemap,
    SetViewport,
    StoreUpdate,
)


class StoreSnapshot(BaseModel):
    """Point-in-time copy of the application state this layer cares about."""

    model_config = ConfigDict(frozen=True)

    features: dict[str, Feature] = Field(default_factory=dict)
    basemap: str | None = None
    viewport: Bounds | None = None
    selected_feature_id: str | None = None


class StatePort(Protocol):
    """Structural interface to the application state.

    Updates are applied in submission order and each one is atomic from the
    caller's point of view.
    """

    def get_snapshot(self) -> StoreSnapshot: ...

    def apply(self, update: StoreUpdate) -> None: ...


class InMemoryStateStore:
    """Dict-backed :class:`StatePort`.

    Features are keyed by id; loading a feature whose id is already present
    replaces it, which makes re-imports idempotent. Every applied update is
    kept in :attr:`history`.
    """

    def __init__(self) -> None:
        self._features: dict[str, Feature] = {}
        self._basemap: str | None = None
        self._viewport: Bounds | None = None
        self._selected_feature_id: str | None = None
        self._history: list[StoreUpdate] = []

    @property
    def history(self) -> tuple[StoreUpdate, ...]:
        return tuple(self._history)

    def get_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            features=dict(self._features),
            basemap=self._basemap,
            viewport=self._viewport,
            selected_feature_id=self._selected_feature_id,
        )

    def apply(self, update: StoreUpdate) -> None:
        match update:
            case SetBasemap(basemap=basemap):
                self._basemap = basemap
            case SetViewport(bounds=bounds):
                self._viewport = bounds
            case LoadFeatures(features=features):
                for feature in features:
                    self._features[feature.id] = feature
            case AddFeature(feature=feature):
                self._features[feature.id] = feature
            case SelectFeature(feature_id=feature_id):
                self._selected_feature_id = feature_id
            case _:
                raise TypeError(f"Unhandled store update: {type(update).__name__}")
        self._history.append(update)
