from __future__ import annotations

import copy
import json
import logging

import pytest

from pycivmap.exceptions import CollectionFormatError, CollectionVersionError
from pycivmap.ingestion.collection import decode_collection, load_collection, process_collection_file
from pycivmap.ingestion.files import MemoryFile
from pycivmap.models import MarkerGeometry
from pycivmap.state import InMemoryStateStore, LoadFeatures


def _document(**extra: object) -> dict:
    document: dict = {"info": {"version": "2.0.0"}}
    document.update(extra)
    return document


MARKER = {"id": "m1", "geometry": {"type": "marker", "position": [10, 20]}, "properties": {"name": "Spawn"}}


def test_old_version_rejected() -> None:
    with pytest.raises(CollectionVersionError) as excinfo:
        decode_collection({"info": {"version": "1.0.0"}, "layers": []})

    assert excinfo.value.version == "1.0.0"
    assert "1.0.0" in str(excinfo.value)


def test_missing_info_rejected() -> None:
    with pytest.raises(CollectionVersionError) as excinfo:
        decode_collection({"features": [MARKER]})

    assert excinfo.value.version is None


def test_version_without_features_loads_empty() -> None:
    collection = decode_collection(_document())

    assert collection.version == "2.0.0"
    assert collection.features == ()
    assert collection.filters == ()


def test_input_document_not_mutated() -> None:
    document = _document(features=[MARKER])
    before = copy.deepcopy(document)

    decode_collection(document)

    assert document == before
    assert "filters" not in document


def test_features_and_filters_decoded() -> None:
    collection = decode_collection(_document(features=[MARKER], filters=[{"name": "all"}]))

    (feature,) = collection.features
    assert feature.id == "m1"
    assert isinstance(feature.geometry, MarkerGeometry)
    assert feature.geometry.position == (10, 20)
    assert collection.filters == ({"name": "all"},)


def test_invalid_feature_is_skipped(caplog) -> None:
    broken = {"id": "c1", "geometry": {"type": "circle", "center": [0, 0]}}

    with caplog.at_level(logging.WARNING, logger="pycivmap.ingestion.collection"):
        collection = decode_collection(_document(features=[broken, MARKER]), source="test")

    assert [f.id for f in collection.features] == ["m1"]
    assert "Skipping invalid feature #0" in caplog.text


def test_non_object_document_rejected() -> None:
    with pytest.raises(CollectionFormatError):
        decode_collection(["not", "a", "collection"])


def test_load_collection_applies_one_batch_and_logs(caplog) -> None:
    store = InMemoryStateStore()

    with caplog.at_level(logging.INFO, logger="pycivmap.ingestion.collection"):
        load_collection(_document(features=[MARKER]), store, source="https://example.org/c.json")

    assert store.history == (LoadFeatures(features=tuple(store.get_snapshot().features.values())),)
    assert "Loaded collection with 1 features and 0 filters from https://example.org/c.json" in caplog.text


def test_rejected_collection_loads_nothing() -> None:
    store = InMemoryStateStore()

    with pytest.raises(CollectionVersionError):
        load_collection({"info": {"version": "3.0.0"}, "features": [MARKER]}, store)

    assert store.history == ()


@pytest.mark.asyncio
async def test_collection_file() -> None:
    store = InMemoryStateStore()
    file = MemoryFile("shared.civmap.json", json.dumps(_document(features=[MARKER])))

    features = await process_collection_file(file, store)

    assert [f.id for f in features] == ["m1"]
    assert "m1" in store.get_snapshot().features


@pytest.mark.asyncio
async def test_collection_file_with_invalid_json() -> None:
    with pytest.raises(CollectionFormatError):
        await process_collection_file(MemoryFile("broken.civmap.json", "{"), InMemoryStateStore())
