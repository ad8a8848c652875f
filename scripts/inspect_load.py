#!/usr/bin/env python3
"""Parse fragments and import files, then print the resulting store state.

Useful to check what a shared link or an exported mod file turns into
without opening the map.

Usage
-----
    python scripts/inspect_load.py --fragment '#c=12,34,r50#b=dark'
    python scripts/inspect_load.py --fragment '#u=https://example.org/x.civmap.json#f=abc'
    python scripts/inspect_load.py --file Snitches.csv --file waypoints.points
    python scripts/inspect_load.py --serialize --fragment '5x/10z/1'

Options::

    --fragment TEXT     URL fragment to parse and apply (may repeat)
    --file PATH         Dropped file to import (may repeat)
    --serialize         Print the fragment re-encoded in the current grammar
    --json              Output as machine-readable JSON
    -v, --verbose       Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycivmap import (  # noqa: E402
    CivMapConfig,
    InMemoryStateStore,
    LoadOrchestrator,
    LoadReport,
    LocalFile,
    parse_fragment,
    serialize_state,
)
from pycivmap._redact import summarize_for_log  # noqa: E402


def _report_to_dict(label: str, report: LoadReport | None) -> dict[str, Any]:
    if report is None:
        return {"input": label, "matched": False}
    return {
        "input": label,
        "source": report.source,
        "features_loaded": report.features_loaded,
        "selected_feature_id": report.selected_feature_id,
        "superseded": report.superseded,
        "errors": [f"{type(exc).__name__}: {exc}" for exc in report.errors],
    }


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    config = CivMapConfig.from_env()
    store = InMemoryStateStore()
    reports: list[dict[str, Any]] = []
    serialized: list[str] = []

    async with LoadOrchestrator(store, config=config) as orchestrator:
        for path in args.file:
            report = await orchestrator.import_file(LocalFile(path))
            reports.append(_report_to_dict(path, report))
        for fragment in args.fragment:
            if args.serialize:
                serialized.append(serialize_state(parse_fragment(fragment)))
            report = await orchestrator.load_fragment(fragment)
            reports.append(_report_to_dict(fragment, report))

    snapshot = store.get_snapshot()
    result: dict[str, Any] = {
        "reports": reports,
        "basemap": snapshot.basemap,
        "viewport": snapshot.viewport,
        "selected_feature_id": snapshot.selected_feature_id,
        "features": {
            fid: summarize_for_log(feature.model_dump(mode="json"), max_string=config.log_max_string)
            for fid, feature in snapshot.features.items()
        },
    }
    if args.serialize:
        result["serialized"] = serialized
    return result


def _print_text(result: dict[str, Any]) -> None:
    line = "=" * 60
    for report in result["reports"]:
        print(f"\n{line}\n  {report['input']}\n{line}")
        for key, value in report.items():
            if key != "input":
                print(f"  {key}: {value}")
    print(f"\n{line}\n  Store\n{line}")
    print(f"  basemap: {result['basemap']}")
    print(f"  viewport: {result['viewport']}")
    print(f"  selected_feature_id: {result['selected_feature_id']}")
    print(f"  features: {len(result['features'])}")
    for fid, feature in result["features"].items():
        print(f"    {fid}: {feature['geometry'].get('type')}")
    for fragment in result.get("serialized", []):
        print(f"  serialized: {fragment}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--fragment", action="append", default=[], help="URL fragment to apply")
    parser.add_argument("--file", action="append", default=[], help="file to import")
    parser.add_argument("--serialize", action="store_true", help="re-encode each fragment")
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.fragment and not args.file:
        parser.error("nothing to do: pass --fragment and/or --file")

    result = asyncio.run(_run(args))
    if args.json:
        print(json.dumps(result, indent=2, default=str))
    else:
        _print_text(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
