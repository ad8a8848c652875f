"""Line-oriented importers: VoxelMap waypoints and SnitchMaster snitches.

Both formats are hand-exported by third-party game mods, so line quality
varies. Every line becomes at most one feature; a line that fails to parse
is logged and skipped without affecting the rest of the file. All features
of a file reach the store as a single :class:`LoadFeatures` update.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from typing import Any

from pycivmap._constants import (
    ID_PREFIX_SNITCHMASTER,
    ID_PREFIX_VOXELMAP,
    SNITCH_FAR_OFFSET,
    SNITCH_NEAR_OFFSET,
    WAYPOINT_MARKER_RADIUS,
)
from pycivmap.ingestion.files import DroppedFile
from pycivmap.ingestion.schema import FieldSpec, LineSchema, parse_bool, parse_float, parse_int
from pycivmap.models import Feature, MarkerGeometry, PolygonGeometry
from pycivmap.state import LoadFeatures, StatePort

_logger = logging.getLogger(__name__)

# name, x, z, y, enabled, red, green, blue, suffix, world, dimensions
VOXELMAP_SCHEMA = LineSchema(
    fields=(
        FieldSpec("name", default=""),
        FieldSpec("x", parse_int, required=True),
        FieldSpec("z", parse_int, required=True),
        FieldSpec("y", parse_int, required=True),
        FieldSpec("enabled", parse_bool, default=False),
        FieldSpec("red", parse_float, default=0.0),
        FieldSpec("green", parse_float, default=0.0),
        FieldSpec("blue", parse_float, default=0.0),
        FieldSpec("suffix"),
        FieldSpec("world"),
        FieldSpec("dimensions"),
    ),
    passthrough_unknown=True,
)

SNITCHMASTER_SCHEMA = LineSchema(
    fields=(
        FieldSpec("x", parse_int, required=True),
        FieldSpec("y", parse_int, required=True),
        FieldSpec("z", parse_int, required=True),
        FieldSpec("world"),
        FieldSpec("source"),
        FieldSpec("group", default=""),
        FieldSpec("name"),
        FieldSpec("cull", parse_float),
    ),
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _rgb(red: float, green: float, blue: float) -> str:
    r, g, b = (_round_half_up(channel * 255) for channel in (red, green, blue))
    return f"rgb({r},{g},{b})"


def _decode_lines(
    lines: Iterable[str],
    decode_line: Callable[[str], Feature | None],
    *,
    format_name: str,
) -> list[Feature]:
    features: list[Feature] = []
    for number, line in enumerate(lines, start=1):
        try:
            feature = decode_line(line)
        except ValueError as exc:
            _logger.debug("Skipping malformed %s line %d: %s", format_name, number, exc)
            continue
        if feature is not None:
            features.append(feature)
    return features


# ------------------------------------------------------------------
# VoxelMap
# ------------------------------------------------------------------


def _split_tokens(line: str) -> dict[str, str]:
    tokens: dict[str, str] = {}
    for entry in line.split(","):
        key, sep, value = entry.partition(":")
        if sep:
            tokens[key.strip()] = value
    return tokens


def _decode_waypoint(line: str) -> Feature | None:
    tokens = _split_tokens(line)
    if "x" not in tokens:
        return None
    p: dict[str, Any] = VOXELMAP_SCHEMA.coerce_record(tokens)

    color = _rgb(p["red"], p["green"], p["blue"])
    return Feature(
        id=f"{ID_PREFIX_VOXELMAP}-{p['x']},{p['y']},{p['z']},{p['name']}",
        geometry=MarkerGeometry(position=(p["z"], p["x"])),
        style={
            "circle_marker": {
                "radius": WAYPOINT_MARKER_RADIUS,
                "weight": 0,
                "fillColor": color,
                "color": color,
            }
        },
        properties={
            **p,
            "is_voxelmap_waypoint": True,
            "is_waypoint": True,
        },
    )


def parse_waypoints(text: str) -> list[Feature]:
    """Decode a VoxelMap ``.points`` export.

    Each data line is a comma-separated list of ``key:value`` tokens; lines
    without an ``x`` token (headers, blank lines) are ignored.
    """
    return _decode_lines(text.splitlines(), _decode_waypoint, format_name="VoxelMap")


async def process_waypoints_file(file: DroppedFile, store: StatePort) -> list[Feature]:
    """Read a ``.points`` file and load its waypoints as one batch."""
    features = parse_waypoints(await file.read_text())
    store.apply(LoadFeatures(features=tuple(features)))
    _logger.info("Loaded %d VoxelMap waypoints from %s", len(features), file.name)
    return features


# ------------------------------------------------------------------
# SnitchMaster
# ------------------------------------------------------------------


def _decode_snitch(line: str) -> Feature | None:
    if not line.strip():
        return None
    p: dict[str, Any] = SNITCHMASTER_SCHEMA.parse_positional(line.split(","))
    x, z = p["x"], p["z"]
    near, far = SNITCH_NEAR_OFFSET, SNITCH_FAR_OFFSET

    return Feature(
        id=f"{ID_PREFIX_SNITCHMASTER}-{x},{p['y']},{z},{p['group']}",
        geometry=PolygonGeometry(
            positions=(
                (z - near, x - near),
                (z + far, x - near),
                (z + far, x + far),
                (z - near, x + far),
            )
        ),
        properties={
            "is_snitch": True,
            "from_snitchmaster": True,
            **p,
        },
    )


def parse_snitches(text: str) -> list[Feature]:
    """Decode a SnitchMaster ``Snitches.csv`` export.

    Columns: ``x, y, z, world, source, group, name, cull``.
    """
    return _decode_lines(text.splitlines(), _decode_snitch, format_name="SnitchMaster")


async def process_snitches_file(file: DroppedFile, store: StatePort) -> list[Feature]:
    """Read a ``Snitches.csv`` file and load its snitches as one batch."""
    features = parse_snitches(await file.read_text())
    store.apply(LoadFeatures(features=tuple(features)))
    _logger.info("Loaded %d SnitchMaster snitches from %s", len(features), file.name)
    return features
