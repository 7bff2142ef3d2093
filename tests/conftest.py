"""Shared test constants, fixtures, and factory functions."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from flatblog.blog_client import BlogClient
from flatblog.codec import encode
from flatblog.config import Settings
from flatblog.main import create_app
from flatblog.models import CreatePostRequest, Post

# -- Constants --

BASE_URL = "http://test"
ALLOWED_ORIGIN = "http://localhost:1234"
CREATED = {"message": "Successfully created post"}

SAMPLE_POSTS = [
    Post(id=0, title="Hello", body="First post"),
    Post(id=1, title="Second", body="More words"),
]


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {
        "posts_path": "posts.json",
        "create_store_if_missing": False,
    }
    return Settings(**(defaults | overrides))


def make_post(post_id: int = 0, title: str = "Title", body: str = "Body") -> Post:
    return Post(id=post_id, title=title, body=body)


def make_draft(title: str = "Title", body: str = "Body") -> CreatePostRequest:
    return CreatePostRequest(title=title, body=body)


def write_posts(path: Path, posts: list[Post]) -> None:
    path.write_text(encode(posts), encoding="utf-8")


# -- Fixtures --


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """An empty post store file."""
    path = tmp_path / "posts.json"
    path.write_text("[]", encoding="utf-8")
    return path


@pytest.fixture
def app(store_path: Path) -> FastAPI:
    return create_app(make_settings(posts_path=str(store_path)))


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """AsyncClient wired to the FastAPI app through the ASGI transport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as c:
        yield c


@pytest.fixture
async def blog_client(app: FastAPI) -> AsyncIterator[BlogClient]:
    """BlogClient talking to the in-process app."""
    api = BlogClient(BASE_URL, transport=ASGITransport(app=app))
    yield api
    await api.close()
