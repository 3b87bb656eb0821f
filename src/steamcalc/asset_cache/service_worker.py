"""Offline asset cache worker: precache on install, purge on activate, cache-first fetch."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

import httpx

from ..config import AssetCacheConfig
from ..errors import InstallError
from .cache_storage import CachedResponse, CacheStorage, CacheStore

logger = logging.getLogger(__name__)


class WorkerHost(Protocol):
    """Lifecycle hooks the hosting runtime exposes to a worker."""

    def skip_waiting(self, worker: "AssetCacheWorker") -> None:
        ...

    async def claim_clients(self, worker: "AssetCacheWorker") -> None:
        ...


class AssetCacheWorker:
    """Serves the application's static assets from a versioned cache store.

    The worker owns exactly one store, named after ``cache_name``. Install
    fills it with the precache list, activate removes every other store, and
    fetch answers from the store before falling back to the network. When the
    network is unreachable the cached start page is served instead.
    """

    def __init__(
        self,
        storage: CacheStorage,
        network: httpx.AsyncBaseTransport,
        *,
        scope: str,
        cache_name: str,
        precache: Iterable[str],
        fallback: str = "./index.html",
    ) -> None:
        self.storage = storage
        self.network = network
        self.scope = httpx.URL(scope)
        self.cache_name = cache_name
        self.precache = tuple(precache)
        self.fallback = fallback
        self.host: WorkerHost | None = None

    @classmethod
    def from_config(
        cls,
        config: AssetCacheConfig,
        storage: CacheStorage,
        network: httpx.AsyncBaseTransport,
        *,
        scope: str | None = None,
    ) -> "AssetCacheWorker":
        origin = scope or config.origin
        if not origin:
            raise ValueError("An asset origin URL is required to build the cache worker")
        if not origin.endswith("/"):
            origin = f"{origin}/"
        return cls(
            storage,
            network,
            scope=origin,
            cache_name=config.cache_name,
            precache=config.precache,
            fallback=config.fallback,
        )

    def __repr__(self) -> str:
        return f"AssetCacheWorker({self.cache_name!r}, scope={str(self.scope)!r})"

    def resolve(self, path: str) -> httpx.URL:
        """Resolve a precache path against the worker scope."""

        return self.scope.join(path)

    def current_store(self) -> CacheStore | None:
        if not self.storage.has(self.cache_name):
            return None
        return self.storage.open(self.cache_name)

    async def _network_fetch(self, request: httpx.Request) -> CachedResponse:
        response = await self.network.handle_async_request(request)
        try:
            return await CachedResponse.from_response(response)
        finally:
            await response.aclose()

    # ------------------------------------------------------------------
    # Lifecycle handlers
    # ------------------------------------------------------------------
    async def on_install(self) -> None:
        """Fetch the whole precache list and store it under ``cache_name``.

        Nothing is stored unless every asset was fetched successfully; any
        failure raises :class:`InstallError` to the host.
        """

        fetched: list[tuple[httpx.Request, CachedResponse]] = []
        for path in self.precache:
            request = httpx.Request("GET", self.resolve(path))
            try:
                cached = await self._network_fetch(request)
            except httpx.TransportError as exc:
                raise InstallError(f"Failed to fetch {request.url}: {exc}", url=str(request.url)) from exc
            if not cached.is_success:
                raise InstallError(
                    f"Failed to fetch {request.url}: HTTP {cached.status_code}",
                    url=str(request.url),
                )
            fetched.append((request, cached))

        self.storage.open(self.cache_name).put_all(fetched)
        logger.info("Asset cache %s installed with %d assets", self.cache_name, len(fetched))
        if self.host is not None:
            self.host.skip_waiting(self)

    async def on_activate(self) -> None:
        """Delete every cache store except the current version, then claim clients."""

        for name in self.storage.keys():
            if name != self.cache_name:
                self.storage.delete(name)
                logger.info("Purged stale asset cache %s", name)
        logger.info("Asset cache %s activated", self.cache_name)
        if self.host is not None:
            await self.host.claim_clients(self)

    async def on_fetch(self, request: httpx.Request) -> httpx.Response:
        """Answer *request* from the cache, then the network, then the start page."""

        store = self.current_store()
        if store is not None:
            cached = store.match(request)
            if cached is not None:
                logger.debug("Cache hit: %s %s", request.method, request.url)
                return cached.to_response(request)

        try:
            fetched = await self._network_fetch(request)
        except httpx.TransportError as exc:
            fallback = self._fallback_response(store)
            if fallback is None:
                logger.warning("Network failed for %s and no start page is cached", request.url)
                raise
            logger.info("Network failed for %s (%s); serving cached start page", request.url, exc)
            return fallback.to_response(request)

        if fetched.is_success and request.method.upper() == "GET":
            self.storage.open(self.cache_name).put(request, fetched)
            logger.debug("Cached %s", request.url)
        return fetched.to_response(request)

    def _fallback_response(self, store: CacheStore | None) -> CachedResponse | None:
        if store is None:
            return None
        return store.match(httpx.Request("GET", self.resolve(self.fallback)))


__all__ = ["AssetCacheWorker", "WorkerHost"]
