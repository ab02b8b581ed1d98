import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import httpx
import pygame

from flappy_strike.assets import AssetLoader
from flappy_strike.config import ASSET_BASE_URL, ASSET_FILES


def setup_module(module: object) -> None:
    pygame.init()


def teardown_module(module: object) -> None:
    pygame.quit()


def png_bytes(tmp_path, size=(4, 4)) -> bytes:
    path = tmp_path / "sample.png"
    pygame.image.save(pygame.Surface(size), str(path))
    return path.read_bytes()


def test_missing_assets_fail_without_blocking(tmp_path) -> None:
    pygame.image.save(pygame.Surface((4, 4)), str(tmp_path / "bird.png"))
    loader = AssetLoader(
        tmp_path, {"bird": "bird.png", "pipe": "nope.png"}, timeout_ms=2000, cache_dir=tmp_path, base_url=None
    )
    assert not loader.ready(0.0)
    loader.start(0.0)
    loader.wait(timeout=5)
    assert loader.ready(0.0)
    assert loader.get("bird").get_size() == (4, 4)
    assert loader.get("pipe") is None
    assert loader.failed == {"pipe"}


def test_default_sprites_are_downloaded_into_cache(tmp_path) -> None:
    body = png_bytes(tmp_path, (6, 3))
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, content=body)

    cache = tmp_path / "cache"
    loader = AssetLoader(
        tmp_path / "local",
        cache_dir=cache,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    loader.start(0.0)
    loader.wait(timeout=5)
    loader.close()

    assert sorted(requested) == sorted(ASSET_BASE_URL + f for f in ASSET_FILES.values())
    assert loader.failed == set()
    for name, filename in ASSET_FILES.items():
        assert loader.get(name).get_size() == (6, 3)
        assert (cache / filename).read_bytes() == body


def test_local_and_cached_copies_skip_the_network(tmp_path) -> None:
    body = png_bytes(tmp_path)
    local = tmp_path / "local"
    cache = tmp_path / "cache"
    local.mkdir()
    cache.mkdir()
    (local / ASSET_FILES["bird"]).write_bytes(body)
    (cache / ASSET_FILES["pipe"]).write_bytes(body)
    (cache / ASSET_FILES["bg"]).write_bytes(body)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request to {request.url}")

    loader = AssetLoader(local, cache_dir=cache, http_client=httpx.Client(transport=httpx.MockTransport(handler)))
    loader.start(0.0)
    loader.wait(timeout=5)
    assert loader.failed == set()
    assert loader.locate(ASSET_FILES["bird"]) == local / ASSET_FILES["bird"]
    assert loader.locate(ASSET_FILES["pipe"]) == cache / ASSET_FILES["pipe"]


def test_http_error_marks_asset_failed(tmp_path) -> None:
    loader = AssetLoader(
        tmp_path,
        {"bg": "background-day.png"},
        cache_dir=tmp_path / "cache",
        http_client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404))),
    )
    loader.start(0.0)
    loader.wait(timeout=5)
    assert loader.failed == {"bg"}
    assert loader.get("bg") is None
    assert not (tmp_path / "cache" / "background-day.png").exists()


def test_ready_with_nothing_to_load(tmp_path) -> None:
    loader = AssetLoader(tmp_path, {}, timeout_ms=2000, base_url=None)
    loader.start(1000.0)
    assert loader.ready(1000.0)
    assert loader.get("bg") is None


def test_env_overrides_asset_dirs(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("FLAPPY_STRIKE_ASSETS", str(tmp_path))
    monkeypatch.setenv("FLAPPY_STRIKE_CACHE", str(tmp_path / "cache"))
    loader = AssetLoader()
    assert loader.directory == tmp_path
    assert loader.cache_dir == tmp_path / "cache"
