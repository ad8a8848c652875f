"""Ingestion layer.

Importers for dropped files and collection documents. Each importer turns
its input into :class:`pycivmap.models.Feature` records and hands them to a
:class:`pycivmap.state.StatePort` as a single update.
"""

from pycivmap.ingestion.collection import decode_collection, load_collection, process_collection_file
from pycivmap.ingestion.files import DroppedFile, LocalFile, MemoryFile
from pycivmap.ingestion.lines import (
    parse_snitches,
    parse_waypoints,
    process_snitches_file,
    process_waypoints_file,
)
from pycivmap.ingestion.registry import FileFormat, FormatRegistry, default_registry
from pycivmap.ingestion.tile import build_tile_feature, process_tile_file

__all__ = [
    "DroppedFile",
    "FileFormat",
    "FormatRegistry",
    "LocalFile",
    "MemoryFile",
    "build_tile_feature",
    "decode_collection",
    "default_registry",
    "load_collection",
    "parse_snitches",
    "parse_waypoints",
    "process_collection_file",
    "process_snitches_file",
    "process_tile_file",
    "process_waypoints_file",
]
