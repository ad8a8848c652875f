from __future__ import annotations

import pytest
from pydantic import ValidationError

from pycivmap.models import Feature, MarkerGeometry, PolygonGeometry
from pycivmap.state import (
    AddFeature,
    InMemoryStateStore,
    LoadFeatures,
    SelectFeature,
    SetBasemap,
    SetViewport,
)


def _marker(fid: str, z: float = 0, x: float = 0) -> Feature:
    return Feature(id=fid, geometry=MarkerGeometry(position=(z, x)))


def test_load_replaces_feature_with_same_id() -> None:
    store = InMemoryStateStore()
    store.apply(LoadFeatures(features=(_marker("a", 1, 1), _marker("b"))))
    store.apply(LoadFeatures(features=(_marker("a", 5, 5),)))

    features = store.get_snapshot().features
    assert set(features) == {"a", "b"}
    assert features["a"].geometry.position == (5, 5)  # type: ignore[union-attr]


def test_updates_recorded_in_submission_order() -> None:
    store = InMemoryStateStore()
    updates = [
        SetBasemap(basemap="dark"),
        AddFeature(feature=_marker("a")),
        SelectFeature(feature_id="a"),
        SetViewport(bounds=((0, 0), (10, 10))),
    ]
    for update in updates:
        store.apply(update)

    assert store.history == tuple(updates)
    snapshot = store.get_snapshot()
    assert snapshot.basemap == "dark"
    assert snapshot.selected_feature_id == "a"
    assert snapshot.viewport == ((0, 0), (10, 10))


def test_snapshot_is_a_copy() -> None:
    store = InMemoryStateStore()
    store.apply(AddFeature(feature=_marker("a")))

    snapshot = store.get_snapshot()
    snapshot.features.pop("a")

    assert "a" in store.get_snapshot().features


def test_feature_geometry_is_immutable() -> None:
    feature = Feature(id="p", geometry=PolygonGeometry(positions=((0, 0), (1, 1))))

    with pytest.raises(ValidationError):
        feature.id = "other"  # type: ignore[misc]

    assert feature.id == "p"
    assert feature.geometry.type == "polygon"
