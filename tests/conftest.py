# tests/conftest.py
import logging

import httpx
import pytest

from steamcalc.asset_cache.cache_storage import CacheStorage
from steamcalc.config import (
    CACHE_DIR_ENV_VAR,
    CONFIG_ENV_VAR,
    ORIGIN_ENV_VAR,
    AssetCacheConfig,
    load_config,
)
from steamcalc.logging_config import LOGGER_NAME
from steamcalc.saturation.saturation_table import SaturationTable

SCOPE = "https://assets.example.test/steamcalc/"

SITE_FILES = {
    "/steamcalc/": b"<html>start</html>",
    "/steamcalc/index.html": b"<html>start</html>",
    "/steamcalc/styles.css": b"body { color: #1d3557; }",
    "/steamcalc/script.js": b"console.log('calc');",
    "/steamcalc/manifest.json": b'{"name": "Steam Calc"}',
    "/steamcalc/icons/icon-192.png": b"\x89PNG192",
    "/steamcalc/icons/icon-512.png": b"\x89PNG512",
    "/steamcalc/help.html": b"<html>help</html>",
}


class FakeNetwork:
    """Serves SITE_FILES through an httpx.MockTransport and records every request."""

    def __init__(self, files=None):
        self.files = dict(SITE_FILES if files is None else files)
        self.online = True
        self.failing = set()
        self.calls = []
        self.transport = httpx.MockTransport(self.handler)

    def handler(self, request):
        self.calls.append((request.method, request.url.path))
        if not self.online:
            raise httpx.ConnectError("network unreachable", request=request)
        path = request.url.path
        if path in self.failing:
            return httpx.Response(500, text="server error")
        body = self.files.get(path)
        if body is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, content=body, headers={"x-origin": "network"})

    def count(self, path, method="GET"):
        return self.calls.count((method, path))


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for variable in (CONFIG_ENV_VAR, ORIGIN_ENV_VAR, CACHE_DIR_ENV_VAR):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scope():
    return SCOPE


@pytest.fixture
def table(config):
    return SaturationTable(config.saturation_table)


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def make_network():
    return FakeNetwork


@pytest.fixture
def storage():
    return CacheStorage()


@pytest.fixture
def asset_config(config):
    return AssetCacheConfig(
        cache_name="steamcalc-v2",
        precache=config.asset_cache.precache,
        fallback=config.asset_cache.fallback,
        origin=SCOPE,
    )


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
