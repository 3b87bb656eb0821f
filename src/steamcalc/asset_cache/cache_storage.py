"""Named, versioned stores of cached HTTP responses."""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"

# The stored body is already decoded, so framing and encoding headers no longer apply.
_DROPPED_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})

RequestKey = tuple[str, str]


def request_key(request: httpx.Request) -> RequestKey:
    """Return the (method, URL) identity used for cache matching."""

    return request.method.upper(), str(request.url)


@dataclass(frozen=True)
class CachedResponse:
    """Status, headers and body of a stored response."""

    status_code: int
    headers: tuple[tuple[str, str], ...]
    content: bytes

    @classmethod
    async def from_response(cls, response: httpx.Response) -> "CachedResponse":
        """Read *response* fully and capture a duplicate of it."""

        content = await response.aread()
        headers = tuple(
            (key, value) for key, value in response.headers.multi_items() if key.lower() not in _DROPPED_HEADERS
        )
        return cls(status_code=response.status_code, headers=headers, content=content)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def to_response(self, request: httpx.Request | None = None) -> httpx.Response:
        """Build a fresh :class:`httpx.Response` carrying the stored body."""

        return httpx.Response(
            self.status_code,
            headers=list(self.headers),
            content=self.content,
            request=request,
        )


class CacheStore:
    """A single named cache bucket mapping request identity to a response."""

    def __init__(self, name: str, directory: Path | None = None) -> None:
        self.name = name
        self.directory = directory
        self._entries: Dict[RequestKey, CachedResponse] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request: httpx.Request) -> bool:
        return request_key(request) in self._entries

    def __repr__(self) -> str:
        return f"CacheStore({self.name!r}, {len(self)} entries)"

    def entries(self) -> list[tuple[RequestKey, CachedResponse]]:
        """Return every stored ``(request key, response)`` pair in insertion order."""

        return list(self._entries.items())

    def match(self, request: httpx.Request) -> CachedResponse | None:
        """Return the stored response for an exact (method, URL) match."""

        return self._entries.get(request_key(request))

    def put(self, request: httpx.Request, response: CachedResponse) -> None:
        key = request_key(request)
        self._entries[key] = response
        self._write_body(key, response)
        self._persist()

    def put_all(self, items: Iterable[tuple[httpx.Request, CachedResponse]]) -> None:
        """Store several entries with a single index write."""

        for request, response in items:
            key = request_key(request)
            self._entries[key] = response
            self._write_body(key, response)
        self._persist()

    # ------------------------------------------------------------------
    # Directory persistence
    # ------------------------------------------------------------------
    @staticmethod
    def _body_name(key: RequestKey) -> str:
        digest = hashlib.sha1(f"{key[0]} {key[1]}".encode("utf-8")).hexdigest()
        return f"{digest}.bin"

    def _write_body(self, key: RequestKey, response: CachedResponse) -> None:
        if self.directory is None:
            return
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / self._body_name(key)).write_bytes(response.content)

    def _persist(self) -> None:
        if self.directory is None:
            return
        self.directory.mkdir(parents=True, exist_ok=True)
        index_entries = []
        for key, response in self.entries():
            body_name = self._body_name(key)
            index_entries.append(
                {
                    "method": key[0],
                    "url": key[1],
                    "status": response.status_code,
                    "headers": [list(item) for item in response.headers],
                    "body": body_name,
                }
            )
        index = {"name": self.name, "entries": index_entries}
        tmp_path = self.directory / f"{INDEX_FILE}.tmp"
        tmp_path.write_text(json.dumps(index, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.directory / INDEX_FILE)

    @classmethod
    def load(cls, directory: Path) -> "CacheStore":
        """Rebuild a store from a directory previously written by :meth:`_persist`."""

        index = json.loads((directory / INDEX_FILE).read_text(encoding="utf-8"))
        store = cls(str(index["name"]), directory)
        for entry in index.get("entries", []):
            key = (str(entry["method"]), str(entry["url"]))
            store._entries[key] = CachedResponse(
                status_code=int(entry["status"]),
                headers=tuple((str(name), str(value)) for name, value in entry.get("headers", [])),
                content=(directory / entry["body"]).read_bytes(),
            )
        return store


class CacheStorage:
    """Registry of named cache stores, optionally backed by a directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._stores: Dict[str, CacheStore] = {}
        if root is not None and root.exists():
            self._load_existing(root)

    def _load_existing(self, root: Path) -> None:
        for directory in sorted(path for path in root.iterdir() if path.is_dir()):
            if not (directory / INDEX_FILE).exists():
                continue
            try:
                store = CacheStore.load(directory)
            except (OSError, ValueError, KeyError) as exc:
                logger.warning("Skipping unreadable cache store at %s: %s", directory, exc)
                continue
            self._stores[store.name] = store

    def _directory_for(self, name: str) -> Path | None:
        if self.root is None:
            return None
        return self.root / quote(name, safe="")

    def __iter__(self) -> Iterator[CacheStore]:
        return iter(list(self._stores.values()))

    def keys(self) -> list[str]:
        return list(self._stores)

    def has(self, name: str) -> bool:
        return name in self._stores

    def open(self, name: str) -> CacheStore:
        """Return the store called *name*, creating it when absent."""

        store = self._stores.get(name)
        if store is None:
            store = CacheStore(name, self._directory_for(name))
            self._stores[name] = store
            logger.debug("Created cache store %s", name)
        return store

    def delete(self, name: str) -> bool:
        """Remove the store called *name*; return whether it existed."""

        store = self._stores.pop(name, None)
        if store is None:
            return False
        if store.directory is not None and store.directory.exists():
            shutil.rmtree(store.directory)
        logger.debug("Deleted cache store %s", name)
        return True


__all__ = [
    "CacheStorage",
    "CacheStore",
    "CachedResponse",
    "RequestKey",
    "request_key",
]
