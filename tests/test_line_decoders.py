from __future__ import annotations

import pytest

from pycivmap.ingestion.files import MemoryFile
from pycivmap.ingestion.lines import (
    parse_snitches,
    parse_waypoints,
    process_snitches_file,
    process_waypoints_file,
)
from pycivmap.models import MarkerGeometry, PolygonGeometry
from pycivmap.state import InMemoryStateStore, LoadFeatures

WAYPOINTS = (
    "subworlds:\n"
    "oldNorthWorlds:\n"
    "seeds:\n"
    "name:Home,x:100,z:-200,y:64,enabled:true,red:1.0,green:0.5,blue:0.0,suffix:,world:,dimensions:overworld#\n"
    "name:NoX,z:5,y:64,enabled:false,red:0,green:0,blue:0\n"
)

SNITCHES = "100,64,-200,world,jalist,MyGroup,Gate,12.5\n\n"


# ------------------------------------------------------------------
# VoxelMap waypoints
# ------------------------------------------------------------------


class TestWaypoints:
    def test_line_without_x_is_dropped(self) -> None:
        features = parse_waypoints(WAYPOINTS)

        assert len(features) == 1

    def test_waypoint_feature(self) -> None:
        (feature,) = parse_waypoints(WAYPOINTS)

        assert feature.id == "dragdrop-voxelmap-waypoint-100,64,-200,Home"
        assert isinstance(feature.geometry, MarkerGeometry)
        assert feature.geometry.position == (-200, 100)
        assert feature.properties["is_voxelmap_waypoint"] is True
        assert feature.properties["is_waypoint"] is True
        assert feature.properties["enabled"] is True
        assert feature.properties["x"] == 100
        assert feature.properties["dimensions"] == "overworld#"

    def test_color_scaled_to_rgb(self) -> None:
        (feature,) = parse_waypoints(WAYPOINTS)

        assert feature.style == {
            "circle_marker": {
                "radius": 4,
                "weight": 0,
                "fillColor": "rgb(255,128,0)",
                "color": "rgb(255,128,0)",
            }
        }

    def test_malformed_number_skips_only_that_line(self) -> None:
        text = "name:Bad,x:abc,z:1,y:1\nname:Good,x:1,z:2,y:3\n"

        features = parse_waypoints(text)

        assert [f.id for f in features] == ["dragdrop-voxelmap-waypoint-1,3,2,Good"]

    def test_x_inside_other_key_does_not_count(self) -> None:
        assert parse_waypoints("name:Sneaky,suffix:x,z:1,y:1\n") == []

    def test_enabled_only_true_literal(self) -> None:
        (feature,) = parse_waypoints("name:A,x:1,z:2,y:3,enabled:yes\n")

        assert feature.properties["enabled"] is False

    def test_missing_colors_default_to_black(self) -> None:
        (feature,) = parse_waypoints("name:A,x:1,z:2,y:3\n")

        assert feature.style is not None
        assert feature.style["circle_marker"]["color"] == "rgb(0,0,0)"

    @pytest.mark.asyncio
    async def test_file_is_loaded_as_one_batch(self) -> None:
        store = InMemoryStateStore()
        text = WAYPOINTS + "name:Mine,x:-5,z:7,y:12,enabled:true,red:0,green:1,blue:0\n"

        features = await process_waypoints_file(MemoryFile("waypoints.points", text), store)

        assert len(features) == 2
        assert len(store.history) == 1
        assert isinstance(store.history[0], LoadFeatures)
        assert set(store.get_snapshot().features) == {f.id for f in features}


# ------------------------------------------------------------------
# SnitchMaster snitches
# ------------------------------------------------------------------


class TestSnitches:
    def test_snitch_polygon(self) -> None:
        (feature,) = parse_snitches(SNITCHES)

        assert feature.id == "dragdrop-snitchmaster-100,64,-200,MyGroup"
        assert isinstance(feature.geometry, PolygonGeometry)
        assert feature.geometry.positions == (
            (-211, 89),
            (-188, 89),
            (-188, 112),
            (-211, 112),
        )

    def test_snitch_properties(self) -> None:
        (feature,) = parse_snitches(SNITCHES)

        assert feature.properties == {
            "is_snitch": True,
            "from_snitchmaster": True,
            "x": 100,
            "y": 64,
            "z": -200,
            "world": "world",
            "source": "jalist",
            "group": "MyGroup",
            "name": "Gate",
            "cull": 12.5,
        }
        assert feature.style is None

    def test_same_line_twice_gives_same_id(self) -> None:
        first, second = parse_snitches(SNITCHES + SNITCHES)

        assert first.id == second.id

    def test_malformed_lines_are_skipped(self) -> None:
        text = "abc,64,1,world,src,grp,name,1\n1,2\n" + SNITCHES

        features = parse_snitches(text)

        assert len(features) == 1

    def test_trailing_columns_are_optional(self) -> None:
        (feature,) = parse_snitches("1,2,3\r\n")

        assert feature.id == "dragdrop-snitchmaster-1,2,3,"
        assert feature.properties["cull"] is None

    @pytest.mark.asyncio
    async def test_file_is_loaded_as_one_batch(self) -> None:
        store = InMemoryStateStore()

        await process_snitches_file(MemoryFile("Snitches.csv", SNITCHES + "0,0,0,w,s,g,n,1\n"), store)

        assert len(store.history) == 1
        assert len(store.get_snapshot().features) == 2
