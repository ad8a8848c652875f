"""Collection document decoding.

A collection is the primary interchange format: ``{"info": {"version":
"2.0.0"}, "features": [...], "filters": [...]}``. Only version ``2.0.0``
is read; anything else aborts the load before any feature reaches the
store.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

from pydantic import ValidationError

from pycivmap._constants import COLLECTION_VERSION
from pycivmap.exceptions import CollectionFormatError, CollectionVersionError
from pycivmap.ingestion.files import DroppedFile
from pycivmap.models import Collection, Feature
from pycivmap.state import LoadFeatures, StatePort

_logger = logging.getLogger(__name__)

DRAG_DROP_SOURCE = "drag-drop"


def _document_version(document: dict[str, Any]) -> Any:
    info = document.get("info")
    if not isinstance(info, dict):
        return None
    return info.get("version")


def _decode_features(entries: Any, source: str | None) -> list[Feature]:
    if not isinstance(entries, list):
        raise CollectionFormatError(f"Collection 'features' must be a list, got {type(entries).__name__}")
    features: list[Feature] = []
    for index, entry in enumerate(entries):
        try:
            features.append(Feature.model_validate(entry))
        except ValidationError as exc:
            _logger.warning(
                "Skipping invalid feature #%d in collection from %s: %s",
                index,
                source or "<unknown>",
                exc.errors(include_url=False, include_input=False),
            )
    return features


def decode_collection(document: Any, *, source: str | None = None) -> Collection:
    """Validate and normalize a collection document.

    The caller's document is never modified.

    Raises
    ------
    CollectionFormatError
        If *document* is not a JSON object or its lists are malformed.
    CollectionVersionError
        If ``info.version`` is missing or not ``2.0.0``.
    """
    if not isinstance(document, dict):
        raise CollectionFormatError(f"Collection must be a JSON object, got {type(document).__name__}")

    version = _document_version(document)
    if version != COLLECTION_VERSION:
        raise CollectionVersionError(version)

    data = copy.deepcopy(document)
    data.setdefault("features", [])
    data.setdefault("filters", [])
    if data["features"] is None:
        data["features"] = []
    if data["filters"] is None:
        data["filters"] = []

    filters = data["filters"]
    if not isinstance(filters, list) or not all(isinstance(item, dict) for item in filters):
        raise CollectionFormatError("Collection 'filters' must be a list of objects")

    return Collection(
        version=version,
        features=tuple(_decode_features(data["features"], source)),
        filters=tuple(filters),
    )


def load_collection(document: Any, store: StatePort, *, source: str | None = None) -> Collection:
    """Decode *document* and load its features as one batch.

    Filters are returned on the collection but not applied.
    """
    collection = decode_collection(document, source=source)
    store.apply(LoadFeatures(features=collection.features))
    if source is not None:
        _logger.info(
            "Loaded collection with %d features and %d filters from %s",
            len(collection.features),
            len(collection.filters),
            source,
        )
    return collection


async def process_collection_file(file: DroppedFile, store: StatePort) -> list[Feature]:
    """Read a ``.civmap.json`` file and load it as a collection."""
    text = await file.read_text()
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CollectionFormatError(f"{file.name} is not valid JSON: {exc}") from exc
    collection = load_collection(document, store, source=DRAG_DROP_SOURCE)
    return list(collection.features)
