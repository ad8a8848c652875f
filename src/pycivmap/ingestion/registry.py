"""Filename-based importer dispatch.

The registry is an ordered table of ``(predicate, decoder, label)``
entries; the first predicate that accepts the filename wins and new
entries are tried after all existing ones.
"""

from __future__ import annotations

import posixpath
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pycivmap.ingestion.collection import process_collection_file
from pycivmap.ingestion.files import DroppedFile
from pycivmap.ingestion.lines import process_snitches_file, process_waypoints_file
from pycivmap.ingestion.tile import TILE_FILENAME_RE, process_tile_file
from pycivmap.models import Feature
from pycivmap.state import StatePort

FileDecoder = Callable[[DroppedFile, StatePort], Awaitable[list[Feature]]]
FilenamePredicate = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class FileFormat:
    """A registered importer."""

    predicate: FilenamePredicate
    decode: FileDecoder
    label: str


def exact_name(expected: str) -> FilenamePredicate:
    return lambda filename: filename == expected


def suffix(ending: str) -> FilenamePredicate:
    return lambda filename: filename.endswith(ending)


def _basename(filename: str) -> str:
    return posixpath.basename(filename.replace("\\", "/"))


class FormatRegistry:
    """Ordered importer table."""

    def __init__(self) -> None:
        self._formats: list[FileFormat] = []

    def register(self, predicate: FilenamePredicate, decode: FileDecoder, label: str) -> FileFormat:
        """Append an importer; it is tried after every existing one."""
        entry = FileFormat(predicate=predicate, decode=decode, label=label)
        self._formats.append(entry)
        return entry

    def match(self, filename: str) -> FileFormat | None:
        """Return the first importer accepting *filename*, or ``None``."""
        name = _basename(filename)
        for entry in self._formats:
            if entry.predicate(name):
                return entry
        return None

    @property
    def formats(self) -> tuple[FileFormat, ...]:
        return tuple(self._formats)


def default_registry() -> FormatRegistry:
    """Registry with every built-in importer, in precedence order."""
    registry = FormatRegistry()
    registry.register(exact_name("Snitches.csv"), process_snitches_file, "SnitchMaster snitches")
    registry.register(suffix(".civmap.json"), process_collection_file, "CivMap Collection")
    registry.register(suffix(".points"), process_waypoints_file, "VoxelMap waypoints")
    registry.register(lambda name: TILE_FILENAME_RE.search(name) is not None, process_tile_file, "JourneyMap tile")
    return registry
