from __future__ import annotations

import base64

import pytest

from pycivmap.exceptions import CivMapFileReadError
from pycivmap.ingestion.files import LocalFile, MemoryFile, to_data_url


def test_to_data_url() -> None:
    assert to_data_url(b"hi", "text/plain") == "data:text/plain;base64," + base64.b64encode(b"hi").decode()
    assert to_data_url(b"", None) == "data:application/octet-stream;base64,"


@pytest.mark.asyncio
async def test_local_file_read_text(tmp_path) -> None:
    path = tmp_path / "Snitches.csv"
    path.write_text("1,2,3\n", encoding="utf-8")

    file = LocalFile(path)

    assert file.name == "Snitches.csv"
    assert await file.read_text() == "1,2,3\n"


@pytest.mark.asyncio
async def test_local_file_data_url(tmp_path) -> None:
    path = tmp_path / "0,0.png"
    path.write_bytes(b"\x89PNG")

    url = await LocalFile(path).read_data_url()

    assert url == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()


@pytest.mark.asyncio
async def test_missing_local_file_raises(tmp_path) -> None:
    with pytest.raises(CivMapFileReadError) as excinfo:
        await LocalFile(tmp_path / "gone.points").read_text()

    assert excinfo.value.filename == "gone.points"


@pytest.mark.asyncio
async def test_memory_file_rejects_binary_text() -> None:
    with pytest.raises(CivMapFileReadError):
        await MemoryFile("x.points", b"\xff\xfe\xfa").read_text()
