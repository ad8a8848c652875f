"""pycivmap - ingestion and URL state codec for CivMap annotations."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycivmap")
except PackageNotFoundError:
    __version__ = "0+local"
from pycivmap.config import CivMapConfig
from pycivmap.exceptions import (
    CivMapConfigError,
    CivMapError,
    CivMapFileReadError,
    CivMapTransportError,
    CivMapValidationError,
    CollectionFormatError,
    CollectionVersionError,
    FeatureNotFoundError,
)
from pycivmap.fragment import parse_fragment, serialize_state
from pycivmap.ingestion import (
    FormatRegistry,
    LocalFile,
    MemoryFile,
    decode_collection,
    default_registry,
    load_collection,
)
from pycivmap.models import (
    Collection,
    Feature,
    ImageGeometry,
    MarkerGeometry,
    PolygonGeometry,
    UrlState,
    ViewportCircle,
)
from pycivmap.orchestrator import LoadOrchestrator, LoadReport
from pycivmap.state import InMemoryStateStore, StatePort, StoreSnapshot

__all__ = [
    "__version__",
    "CivMapConfig",
    "CivMapConfigError",
    "CivMapError",
    "CivMapFileReadError",
    "CivMapTransportError",
    "CivMapValidationError",
    "Collection",
    "CollectionFormatError",
    "CollectionVersionError",
    "Feature",
    "FeatureNotFoundError",
    "FormatRegistry",
    "ImageGeometry",
    "InMemoryStateStore",
    "LoadOrchestrator",
    "LoadReport",
    "LocalFile",
    "MarkerGeometry",
    "MemoryFile",
    "PolygonGeometry",
    "StatePort",
    "StoreSnapshot",
    "UrlState",
    "ViewportCircle",
    "decode_collection",
    "default_registry",
    "load_collection",
    "parse_fragment",
    "serialize_state",
]
