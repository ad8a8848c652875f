"""Helpers for safe debug logging.

Dropped tiles travel as base64 data URLs and inline collections can carry
thousands of features. This module shrinks such values before they are
emitted in log records.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_DATA_URL_PREFIX = "data:"


def summarize_for_log(value: Any, *, max_string: int = 256, max_items: int = 20, _depth: int = 0) -> Any:
    """Return a shortened copy of *value* suitable for log records."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if value.startswith(_DATA_URL_PREFIX) and "," in value:
            header, _, payload = value.partition(",")
            return f"{header},<{len(payload)} chars>"
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        summary: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                summary["…"] = f"<{len(value) - max_items} more keys>"
                break
            summary[str(k)] = summarize_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return summary

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [
            summarize_for_log(item, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for item in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    return summarize_for_log(repr(value), max_string=max_string, max_items=max_items, _depth=_depth + 1)
