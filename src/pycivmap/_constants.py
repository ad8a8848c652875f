"""Internal constants shared across the library."""

USER_AGENT = "pycivmap/0 (+aiohttp)"

#: The only collection document version this library reads.
COLLECTION_VERSION = "2.0.0"

# ------------------------------------------------------------------
# View geometry
# ------------------------------------------------------------------

#: Radius used when a ``c=`` fragment entry omits one.
DEFAULT_VIEW_RADIUS = 100

#: Legacy ``x/z/zoom`` links map zoom to ``2**-zoom * LEGACY_BASE_RADIUS``.
#: The old links never tracked a real radius; keep the factor as-is.
LEGACY_BASE_RADIUS = 500

# ------------------------------------------------------------------
# Importers
# ------------------------------------------------------------------

#: Edge length of one JourneyMap region tile, in blocks.
JOURNEYMAP_TILE_SIZE = 512

#: SnitchMaster cell boundaries: 11 blocks west/north, 12 east/south of center.
SNITCH_NEAR_OFFSET = 11
SNITCH_FAR_OFFSET = 12

WAYPOINT_MARKER_RADIUS = 4

ID_PREFIX_VOXELMAP = "dragdrop-voxelmap-waypoint"
ID_PREFIX_SNITCHMASTER = "dragdrop-snitchmaster"
ID_PREFIX_JOURNEYMAP = "dragdrop-journeymap-tile"
