"""File-read adapters for dropped files.

A dropped file is read exactly once, either as text or as a ``data:`` URL.
There are no retries: a failed read raises :class:`CivMapFileReadError`.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import Protocol

from pycivmap.exceptions import CivMapFileReadError

_DEFAULT_MEDIA_TYPE = "application/octet-stream"


def to_data_url(content: bytes, media_type: str | None) -> str:
    """Encode *content* as a base64 ``data:`` URL."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{media_type or _DEFAULT_MEDIA_TYPE};base64,{encoded}"


def _guess_media_type(name: str) -> str | None:
    media_type, _ = mimetypes.guess_type(name)
    return media_type


class DroppedFile(Protocol):
    """Structural interface of a file handed to an importer."""

    @property
    def name(self) -> str: ...

    async def read_text(self) -> str: ...

    async def read_data_url(self) -> str: ...


class LocalFile:
    """A file on the local filesystem, read off the event loop."""

    def __init__(self, path: str | Path, *, media_type: str | None = None) -> None:
        self._path = Path(path)
        self._media_type = media_type

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    async def _read_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self._path.read_bytes)
        except OSError as exc:
            raise CivMapFileReadError(f"Could not read {self._path}: {exc}", filename=self.name) from exc

    async def read_text(self) -> str:
        content = await self._read_bytes()
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CivMapFileReadError(f"{self.name} is not UTF-8 text", filename=self.name) from exc

    async def read_data_url(self) -> str:
        content = await self._read_bytes()
        return to_data_url(content, self._media_type or _guess_media_type(self.name))


class MemoryFile:
    """An in-memory file, e.g. an upload body already received."""

    def __init__(self, name: str, content: bytes | str, *, media_type: str | None = None) -> None:
        self._name = name
        self._content = content.encode("utf-8") if isinstance(content, str) else content
        self._media_type = media_type

    @property
    def name(self) -> str:
        return self._name

    async def read_text(self) -> str:
        try:
            return self._content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CivMapFileReadError(f"{self._name} is not UTF-8 text", filename=self._name) from exc

    async def read_data_url(self) -> str:
        return to_data_url(self._content, self._media_type or _guess_media_type(self._name))
