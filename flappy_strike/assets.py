"""Background image loading with a ready signal and per-asset failure tracking.

Each sprite is looked up in the local asset directory first, then in the
download cache. A sprite found in neither place is fetched once from
ASSET_BASE_URL into the cache.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from pathlib import Path
from typing import Mapping, Optional

import httpx
import pygame

from .config import ASSET_BASE_URL, ASSET_FETCH_TIMEOUT_S, ASSET_FILES, ASSET_TIMEOUT_MS

logger = logging.getLogger(__name__)


def default_asset_dir() -> Path:
    return Path(os.environ.get("FLAPPY_STRIKE_ASSETS", "assets"))


def default_cache_dir() -> Path:
    return Path(os.environ.get("FLAPPY_STRIKE_CACHE", Path.home() / ".cache" / "flappy_strike"))


class AssetLoader:
    """Loads a fixed set of named images off the frame thread.

    The loader is ready once every image has loaded or failed, or once the
    timeout has elapsed. A failed image is never retried; the renderer draws
    a placeholder for it instead.
    """

    def __init__(
        self,
        directory: Optional[Path] = None,
        files: Mapping[str, str] = ASSET_FILES,
        timeout_ms: float = ASSET_TIMEOUT_MS,
        cache_dir: Optional[Path] = None,
        base_url: Optional[str] = ASSET_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.directory = Path(directory) if directory is not None else default_asset_dir()
        self.cache_dir = Path(cache_dir) if cache_dir is not None else default_cache_dir()
        self.files = dict(files)
        self.timeout_ms = timeout_ms
        self.base_url = base_url
        self.images: dict[str, pygame.Surface] = {}
        self.failed: set[str] = set()
        self._http = http_client
        self._started_at: Optional[float] = None
        self._futures: dict[str, Future] = {}
        self._executor: Optional[ThreadPoolExecutor] = None

    def start(self, now: float) -> None:
        self._started_at = now
        if self._http is None and self.base_url:
            self._http = httpx.Client(timeout=httpx.Timeout(ASSET_FETCH_TIMEOUT_S), follow_redirects=True)
        self._executor = ThreadPoolExecutor(max_workers=len(self.files) or 1, thread_name_prefix="assets")
        for name, filename in self.files.items():
            self._futures[name] = self._executor.submit(self._load, filename)
        self._executor.shutdown(wait=False)

    def locate(self, filename: str) -> Path:
        """Local copy if there is one, otherwise the (possibly freshly downloaded) cached copy."""
        local = self.directory / filename
        if local.is_file():
            return local
        cached = self.cache_dir / filename
        if cached.is_file() or not self.base_url or self._http is None:
            return cached
        url = self.base_url + filename
        response = self._http.get(url)
        response.raise_for_status()
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        partial = cached.with_suffix(cached.suffix + ".part")
        partial.write_bytes(response.content)
        partial.replace(cached)
        logger.info("Downloaded %s to %s", url, cached)
        return cached

    def _load(self, filename: str) -> pygame.Surface:
        return pygame.image.load(str(self.locate(filename)))

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every pending load settles or `timeout` seconds pass."""
        wait_futures(list(self._futures.values()), timeout=timeout)
        self._collect()

    def _collect(self) -> None:
        for name, future in list(self._futures.items()):
            if not future.done():
                continue
            del self._futures[name]
            try:
                self.images[name] = future.result()
                logger.debug("Loaded asset %s", name)
            except (pygame.error, OSError, httpx.HTTPError) as e:
                self.failed.add(name)
                logger.warning("Asset %s failed to load: %s", name, e)

    def ready(self, now: float) -> bool:
        if self._started_at is None:
            return False
        self._collect()
        if not self._futures:
            return True
        return now - self._started_at >= self.timeout_ms

    def get(self, name: str) -> Optional[pygame.Surface]:
        """Image for name, or None while it is missing, loading or failed."""
        self._collect()
        return self.images.get(name)

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None
