"""Load orchestration: apply fragments, remote collections and dropped files.

The orchestrator is the single place that decides what happens when a load
step fails. Decoders raise document-level errors; the orchestrator logs
them, records them on a :class:`LoadReport` and carries on with the steps
that do not depend on the failed one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from pycivmap._transport import HttpJsonFetcher, JsonFetcher
from pycivmap.config import CivMapConfig
from pycivmap.exceptions import CivMapError, FeatureNotFoundError
from pycivmap.fragment import parse_fragment
from pycivmap.geometry import circle_bounds_from_geometry, circle_to_bounds
from pycivmap.ingestion.collection import load_collection
from pycivmap.ingestion.files import DroppedFile
from pycivmap.ingestion.registry import FormatRegistry, default_registry
from pycivmap.models import Collection, UrlState, ViewportCircle
from pycivmap.state import AddFeature, SelectFeature, SetBasemap, SetViewport, StatePort

_logger = logging.getLogger(__name__)

INLINE_COLLECTION_SOURCE = "#"


@dataclass(slots=True)
class LoadReport:
    """Outcome of one orchestration run or file import.

    ``errors`` holds every non-fatal failure in the order it happened.
    ``superseded`` is set when a newer run started while this one waited on
    its fetch; a superseded run applies nothing after the fetch.
    """

    source: str | None = None
    features_loaded: int = 0
    selected_feature_id: str | None = None
    errors: list[CivMapError] = field(default_factory=list)
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


class LoadOrchestrator:
    """Applies parsed view state and imported files to a :class:`StatePort`.

    Usage::

        store = InMemoryStateStore()
        async with LoadOrchestrator(store) as orchestrator:
            report = await orchestrator.load_fragment("#u=https://example.org/c.civmap.json#f=abc")
    """

    def __init__(
        self,
        store: StatePort,
        *,
        config: CivMapConfig | None = None,
        fetcher: JsonFetcher | None = None,
        session: aiohttp.ClientSession | None = None,
        registry: FormatRegistry | None = None,
    ) -> None:
        self._store = store
        self._config = config or CivMapConfig()
        self._fetcher = fetcher
        self._external_session = session is not None
        self._http_session = session
        self._registry = registry or default_registry()
        self._generation = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LoadOrchestrator:
        if self._fetcher is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._fetcher = HttpJsonFetcher(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._fetcher = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_fetcher(self) -> JsonFetcher:
        if self._fetcher is None:
            raise CivMapError("Orchestrator not initialized. Use 'async with LoadOrchestrator(...) as orchestrator:'")
        return self._fetcher

    def _record(self, report: LoadReport, error: CivMapError, context: str) -> None:
        _logger.warning("%s: %s", context, error)
        report.errors.append(error)

    def _apply_viewport(self, circle: ViewportCircle) -> None:
        self._store.apply(SetViewport(bounds=circle_to_bounds(circle)))

    def _load_document(self, document: Any, source: str, report: LoadReport) -> Collection | None:
        try:
            collection = load_collection(document, self._store, source=source)
        except CivMapError as exc:
            self._record(report, exc, f"Could not load collection from {source}")
            return None
        report.features_loaded += len(collection.features)
        return collection

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def load_collection_url(self, url: str) -> LoadReport:
        """Fetch, decode and load a single remote collection."""
        report = LoadReport(source=url)
        fetcher = self._require_fetcher()
        try:
            document = await fetcher.fetch_json(url)
        except CivMapError as exc:
            self._record(report, exc, f"Could not load collection from {url}")
            return report
        self._load_document(document, url, report)
        return report

    async def load_fragment(self, raw: str | None) -> LoadReport:
        """Parse a URL fragment and apply it."""
        return await self.apply_url_state(parse_fragment(raw))

    async def apply_url_state(self, url_state: UrlState) -> LoadReport:
        """Apply *url_state* to the store in dependency order.

        1. basemap
        2. remote collection (awaited; everything below runs after it settles)
        3. inline collection
        4. inline feature, which becomes the selected feature
        5. selected feature, with a derived viewport unless one is given
        6. explicit viewport
        """
        self._generation += 1
        generation = self._generation
        report = LoadReport(source=url_state.collection_url)

        if url_state.basemap:
            self._store.apply(SetBasemap(basemap=url_state.basemap))

        if url_state.collection_url:
            url = url_state.collection_url
            fetcher = self._require_fetcher()
            document: Any = None
            fetched = False
            try:
                document = await fetcher.fetch_json(url)
                fetched = True
            except CivMapError as exc:
                self._record(report, exc, f"Could not load collection from {url}")

            if generation != self._generation:
                _logger.info("Discarding result for %s: superseded by a newer load", url)
                report.superseded = True
                return report

            if fetched:
                self._load_document(document, url, report)

        if url_state.collection is not None:
            self._load_document(url_state.collection, INLINE_COLLECTION_SOURCE, report)

        feature_id = url_state.feature_id
        if url_state.feature is not None:
            self._store.apply(AddFeature(feature=url_state.feature))
            report.features_loaded += 1
            feature_id = url_state.feature.id

        if feature_id:
            feature = self._store.get_snapshot().features.get(feature_id)
            if feature is None:
                self._record(report, FeatureNotFoundError(feature_id), "Cannot select feature")
            else:
                self._store.apply(SelectFeature(feature_id=feature_id))
                report.selected_feature_id = feature_id
                if url_state.viewport is None:
                    self._apply_viewport(circle_bounds_from_geometry(feature.geometry))

        if url_state.viewport is not None:
            self._apply_viewport(url_state.viewport)

        return report

    async def import_file(self, file: DroppedFile) -> LoadReport | None:
        """Import a dropped file with the first matching importer.

        Returns ``None`` when no importer accepts the filename.
        """
        entry = self._registry.match(file.name)
        if entry is None:
            _logger.info("No importer for dropped file %s", file.name)
            return None

        report = LoadReport(source=entry.label)
        try:
            features = await entry.decode(file, self._store)
        except CivMapError as exc:
            self._record(report, exc, f"Could not import {file.name} as {entry.label}")
            return report
        report.features_loaded = len(features)
        _logger.debug("Imported %d features from %s as %s", len(features), file.name, entry.label)
        return report
