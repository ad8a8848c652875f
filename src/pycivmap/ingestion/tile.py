"""JourneyMap region tile importer.

JourneyMap stores one PNG per 512x512 block region, named after the region
indices (``-1,3.png``). Dropping such a file places the image at its
world position.
"""

from __future__ import annotations

import logging
import re

from pycivmap._constants import ID_PREFIX_JOURNEYMAP, JOURNEYMAP_TILE_SIZE
from pycivmap._redact import summarize_for_log
from pycivmap.exceptions import CivMapFileReadError
from pycivmap.ingestion.files import DroppedFile
from pycivmap.models import Feature, ImageGeometry
from pycivmap.state import AddFeature, StatePort

_logger = logging.getLogger(__name__)

TILE_FILENAME_RE = re.compile(r"(-?\d+),(-?\d+)\.png$")


def tile_indices(filename: str) -> tuple[int, int] | None:
    """Return ``(ix, iz)`` parsed from a tile filename, or ``None``."""
    match = TILE_FILENAME_RE.search(filename)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def build_tile_feature(ix: int, iz: int, url: str) -> Feature:
    """Image feature for region ``(ix, iz)``; the id depends on the indices only."""
    n = iz * JOURNEYMAP_TILE_SIZE
    w = ix * JOURNEYMAP_TILE_SIZE
    s = n + JOURNEYMAP_TILE_SIZE
    e = w + JOURNEYMAP_TILE_SIZE

    fid = f"{ID_PREFIX_JOURNEYMAP}-{ix}-{iz}"
    return Feature(
        id=fid,
        geometry=ImageGeometry(url=url, bounds=((n, w), (s, e))),
        properties={
            "is_journeymap_tile": True,
            "name": fid,
        },
    )


async def process_tile_file(file: DroppedFile, store: StatePort) -> list[Feature]:
    """Read a tile image and add it as a single image feature.

    Raises
    ------
    CivMapFileReadError
        If the filename does not carry tile indices.
    """
    indices = tile_indices(file.name)
    if indices is None:
        raise CivMapFileReadError(f"Not a JourneyMap tile filename: {file.name}", filename=file.name)

    url = await file.read_data_url()
    feature = build_tile_feature(*indices, url)
    store.apply(AddFeature(feature=feature))
    _logger.debug("Added JourneyMap tile %s (%s)", feature.id, summarize_for_log(url))
    return [feature]
