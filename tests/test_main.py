"""Tests for the app factory, lifespan, health check and CORS policy."""

from pathlib import Path
from unittest.mock import patch

from httpx import AsyncClient

from flatblog.concurrency import MemoryLock
from flatblog.main import create_app, lifespan, serve
from flatblog.post_store import PostStore
from tests.conftest import ALLOWED_ORIGIN, make_settings


async def test_health_returns_ok(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_app_wires_store(store_path: Path) -> None:
    app = create_app(make_settings(posts_path=str(store_path)))
    assert isinstance(app.state.store, PostStore)
    assert app.state.store.path == store_path
    assert app.state.store.serialized
    assert isinstance(app.state.write_locks, MemoryLock)
    assert not app.state.write_locks.locked()


async def test_lifespan_creates_missing_store(tmp_path: Path) -> None:
    path = tmp_path / "data" / "posts.json"
    app = create_app(make_settings(posts_path=str(path), create_store_if_missing=True))
    async with lifespan(app):
        assert path.read_text(encoding="utf-8") == "[]"


async def test_lifespan_leaves_missing_store_when_disabled(tmp_path: Path) -> None:
    path = tmp_path / "posts.json"
    app = create_app(make_settings(posts_path=str(path), create_store_if_missing=False))
    async with lifespan(app):
        assert not path.exists()


async def test_cors_preflight_from_allowed_origin(client: AsyncClient) -> None:
    resp = await client.options(
        "/posts",
        headers={
            "Origin": ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert "POST" in resp.headers["access-control-allow-methods"]


async def test_cors_preflight_from_other_origin_rejected(client: AsyncClient) -> None:
    resp = await client.options(
        "/posts",
        headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers


async def test_cors_preflight_rejects_put(client: AsyncClient) -> None:
    resp = await client.options(
        "/posts",
        headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "PUT"},
    )
    assert resp.status_code == 400


async def test_simple_request_gets_allow_origin(client: AsyncClient) -> None:
    resp = await client.get("/posts", headers={"Origin": ALLOWED_ORIGIN})
    assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


async def test_options_without_preflight_is_405(client: AsyncClient) -> None:
    resp = await client.options("/posts")
    assert resp.status_code == 405


def test_serve_runs_uvicorn(tmp_path: Path) -> None:
    with (
        patch.dict("os.environ", {"FLATBLOG_POSTS_PATH": str(tmp_path / "p.json")}),
        patch("flatblog.main.configure_logging") as configure,
        patch("flatblog.main.uvicorn.run") as run,
    ):
        serve()
    configure.assert_called_once_with("info")
    _, kwargs = run.call_args
    assert kwargs["port"] == 8000
    assert run.call_args.args[0].state.store.path == tmp_path / "p.json"
