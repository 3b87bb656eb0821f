"""Hosting runtime for the asset cache worker and its httpx transport."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from ..config import AssetCacheConfig
from .cache_storage import CacheStorage
from .service_worker import AssetCacheWorker

logger = logging.getLogger(__name__)


class WorkerRuntime:
    """Drives worker lifecycles and routes requests to the controlling worker.

    A worker version installs once: registering a worker whose store already
    exists goes straight to activation. A failed install propagates to the
    caller and leaves the previously active worker in control.
    """

    def __init__(self, storage: CacheStorage, network: httpx.AsyncBaseTransport | None = None) -> None:
        self.storage = storage
        self.network = network if network is not None else httpx.AsyncHTTPTransport()
        self.active: AssetCacheWorker | None = None
        self.waiting: AssetCacheWorker | None = None
        self.controller: AssetCacheWorker | None = None
        self._skip_waiting: set[int] = set()

    # ------------------------------------------------------------------
    # WorkerHost hooks
    # ------------------------------------------------------------------
    def skip_waiting(self, worker: AssetCacheWorker) -> None:
        self._skip_waiting.add(id(worker))

    async def claim_clients(self, worker: AssetCacheWorker) -> None:
        self.controller = worker
        logger.debug("%r now controls all clients", worker)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    async def register(self, worker: AssetCacheWorker) -> AssetCacheWorker:
        """Install (when needed) and activate *worker*."""

        worker.host = self
        if worker is self.active:
            return worker

        if self.storage.has(worker.cache_name):
            logger.info("Asset cache %s already installed", worker.cache_name)
            self.skip_waiting(worker)
        else:
            logger.info("Installing asset cache %s from %s", worker.cache_name, worker.scope)
            try:
                await worker.on_install()
            except Exception:
                logger.error("Install of asset cache %s failed; keeping %r", worker.cache_name, self.active)
                raise

        if self.active is None or id(worker) in self._skip_waiting:
            await self._activate(worker)
        else:
            self.waiting = worker
            logger.info("Asset cache %s installed and waiting", worker.cache_name)
        return worker

    async def activate_waiting(self) -> AssetCacheWorker | None:
        """Activate a worker that installed without requesting ``skip_waiting``."""

        worker = self.waiting
        if worker is not None:
            await self._activate(worker)
        return worker

    async def _activate(self, worker: AssetCacheWorker) -> None:
        previous = self.active
        self.waiting = None
        self._skip_waiting.discard(id(worker))
        await worker.on_activate()
        self.active = worker
        if previous is not None and self.controller is previous:
            self.controller = worker

    # ------------------------------------------------------------------
    # Request routing
    # ------------------------------------------------------------------
    async def fetch(self, request: httpx.Request) -> httpx.Response:
        """Send *request* through the controlling worker, or straight to the network."""

        if self.controller is None:
            return await self.network.handle_async_request(request)
        return await self.controller.on_fetch(request)

    @property
    def transport(self) -> "AssetCacheTransport":
        return AssetCacheTransport(self)

    async def aclose(self) -> None:
        await self.network.aclose()


class AssetCacheTransport(httpx.AsyncBaseTransport):
    """httpx transport that answers requests through a :class:`WorkerRuntime`."""

    def __init__(self, runtime: WorkerRuntime) -> None:
        self.runtime = runtime

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.runtime.fetch(request)

    async def aclose(self) -> None:
        await self.runtime.aclose()


def build_runtime(
    config: AssetCacheConfig,
    *,
    origin: str | None = None,
    cache_dir: Path | None = None,
    network: httpx.AsyncBaseTransport | None = None,
) -> tuple[WorkerRuntime, AssetCacheWorker]:
    """Create a runtime and a worker sharing one storage and network transport."""

    storage = CacheStorage(cache_dir if cache_dir is not None else config.cache_dir)
    runtime = WorkerRuntime(storage, network)
    worker = AssetCacheWorker.from_config(config, storage, runtime.network, scope=origin)
    return runtime, worker


async def register_worker(
    config: AssetCacheConfig,
    *,
    origin: str | None = None,
    cache_dir: Path | None = None,
    network: httpx.AsyncBaseTransport | None = None,
) -> WorkerRuntime:
    """Build and register the asset cache worker for *config*, returning its runtime."""

    runtime, worker = build_runtime(config, origin=origin, cache_dir=cache_dir, network=network)
    try:
        await runtime.register(worker)
    except Exception:
        await runtime.aclose()
        raise
    return runtime


__all__ = [
    "AssetCacheTransport",
    "WorkerRuntime",
    "build_runtime",
    "register_worker",
]
