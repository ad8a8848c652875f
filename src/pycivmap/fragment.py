"""URL fragment codec.

Two grammars are read:

* legacy ``x[x]/z[z]/zoom`` links, kept for old bookmarks
* ``#key=value`` segments, e.g. ``#c=12,34,r50#b=dark#f=abc``

Only the segment grammar is written. Unknown keys and malformed values are
logged and skipped; parsing never raises for fragment content.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import quote, unquote

from pycivmap._constants import DEFAULT_VIEW_RADIUS, LEGACY_BASE_RADIUS
from pycivmap._redact import summarize_for_log
from pycivmap.ingestion.schema import parse_float
from pycivmap.models import Feature, UrlState, ViewportCircle

_logger = logging.getLogger(__name__)

_LEGACY_RE = re.compile(r"^(-?\d+)x?/(-?\d+)z?/?(-?\d*)")
_CENTER_SPLIT_RE = re.compile(r"[,r]+")

# Characters left readable in text values. '#', '%' and whitespace are always encoded.
_TEXT_SAFE = "/:,;!$&'()*+=@?"


def _parse_center(value: str) -> dict[str, Any]:
    parts = _CENTER_SPLIT_RE.split(value.strip())[:3]
    if len(parts) < 2:
        raise ValueError(f"expected x,z[,radius], got {value!r}")
    x = parse_float(parts[0])
    z = parse_float(parts[1])
    radius = parse_float(parts[2]) if len(parts) > 2 and parts[2] else None

    marker = not radius
    return {
        "viewport": ViewportCircle(x=x, z=z, radius=radius or DEFAULT_VIEW_RADIUS),
        "marker": marker,
    }


def _text(field: str) -> Callable[[str], dict[str, Any]]:
    def parse(value: str) -> dict[str, Any]:
        text = unquote(value)
        if not text:
            raise ValueError("empty value")
        return {field: text}

    return parse


def _parse_feature(value: str) -> dict[str, Any]:
    return {"feature": Feature.model_validate(json.loads(unquote(value)))}


def _parse_collection(value: str) -> dict[str, Any]:
    document = json.loads(unquote(value))
    if not isinstance(document, dict):
        raise ValueError(f"collection must be a JSON object, got {type(document).__name__}")
    return {"collection": document}


_KEY_PARSERS: dict[str, Callable[[str], dict[str, Any]]] = {
    "c": _parse_center,
    "b": _text("basemap"),
    "t": _text("basemap"),
    "f": _text("feature_id"),
    "feature": _parse_feature,
    "collection": _parse_collection,
    "u": _text("collection_url"),
}


def _parse_legacy(match: re.Match[str]) -> UrlState:
    x = parse_float(match.group(1))
    z = parse_float(match.group(2))
    zoom_text = match.group(3)
    zoom = parse_float(zoom_text) if zoom_text not in ("", "-") else 0.0
    try:
        radius = 2.0**-zoom * LEGACY_BASE_RADIUS
    except OverflowError as exc:
        raise ValueError(f"zoom {zoom_text!r} is out of range") from exc
    return UrlState(viewport=ViewportCircle(x=x, z=z, radius=radius))


def parse_fragment(raw: str | None) -> UrlState:
    """Parse a URL fragment (with or without its leading ``#``).

    An absent or empty fragment yields a :class:`UrlState` with every field
    unset.
    """
    if not raw:
        return UrlState()
    fragment = raw[1:] if raw.startswith("#") else raw

    legacy = _LEGACY_RE.match(fragment)
    if legacy is not None:
        try:
            return _parse_legacy(legacy)
        except ValueError as exc:
            _logger.warning("Ignoring malformed legacy url fragment %r: %s", summarize_for_log(fragment), exc)
            return UrlState()

    fields: dict[str, Any] = {}
    for part in fragment.split("#"):
        if not part:
            continue
        key, _, value = part.partition("=")
        parser = _KEY_PARSERS.get(key)
        if parser is None:
            _logger.warning("Unknown url fragment entry %r", summarize_for_log(part))
            continue
        try:
            fields.update(parser(value))
        except ValueError as exc:
            _logger.warning("Ignoring malformed url fragment entry %r: %s", key, exc)
    return UrlState(**fields)


def _format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _encode_text(value: str) -> str:
    return quote(value, safe=_TEXT_SAFE)


def _encode_json(value: Any) -> str:
    return _encode_text(json.dumps(value, separators=(",", ":"), ensure_ascii=False))


def serialize_state(state: UrlState) -> str:
    """Encode *state* as a fragment in the segment grammar.

    Unset fields are omitted; an empty state gives ``""``. A marker is written
    as ``c=x,z`` with no radius, which is why :class:`UrlState` only accepts
    ``marker`` together with the default radius. The output is not
    guaranteed to match the fragment *state* was parsed from, only to parse
    back to the same fields.
    """
    parts: list[str] = []

    viewport = state.viewport
    if viewport is not None:
        center = f"{_format_number(viewport.x)},{_format_number(viewport.z)}"
        if state.marker and viewport.radius == DEFAULT_VIEW_RADIUS:
            parts.append(f"c={center}")
        else:
            parts.append(f"c={center},r{_format_number(viewport.radius)}")
    if state.basemap:
        parts.append(f"b={_encode_text(state.basemap)}")
    if state.feature_id:
        parts.append(f"f={_encode_text(state.feature_id)}")
    if state.collection_url:
        parts.append(f"u={_encode_text(state.collection_url)}")
    if state.feature is not None:
        parts.append(f"feature={_encode_json(state.feature.model_dump(mode='json'))}")
    if state.collection is not None:
        parts.append(f"collection={_encode_json(state.collection)}")

    if not parts:
        return ""
    return "#" + "#".join(parts)
