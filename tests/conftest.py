import asyncio
import io
import tarfile
import zipfile
from pathlib import Path
from typing import Dict

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from onnx_runtime_loader.binaries import platforms
from onnx_runtime_loader.types import HostArch, HostOS


def build_zip(entries: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def build_tgz(entries: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


class ReleaseHost:
    """In-process stand-in for the release download host"""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.requests: list[str] = []
        self.delay: float = 0
        self.base_url = ""

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        if self.delay:
            await asyncio.sleep(self.delay)
        body = self.files.get(request.path)
        if body is None:
            return web.Response(status=404)
        return web.Response(body=body)


@pytest.fixture
def zip_bytes():
    return build_zip


@pytest.fixture
def tgz_bytes():
    return build_tgz


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def linux_host(monkeypatch):
    """Pretend the tests run on 64-bit x86 Linux"""
    monkeypatch.setattr(platforms, "detect_host", lambda: (HostOS.LINUX, HostArch.AMD64))


@pytest_asyncio.fixture
async def release_host():
    host = ReleaseHost()
    app = web.Application()
    app.router.add_get("/{tail:.*}", host.handle)

    server = TestServer(app)
    await server.start_server()
    host.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield host
    finally:
        await server.close()
