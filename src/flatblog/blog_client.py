"""HTTP client for the flatblog backend."""

from __future__ import annotations

from typing import Protocol

import httpx
import structlog

from flatblog.codec import decode
from flatblog.models import CreatePostRequest, CreatePostResponse, Post

log = structlog.get_logger()


class PostsApi(Protocol):
    """Interface for the backend operations the client runtime needs."""

    async def list_posts(self) -> list[Post]: ...
    async def create_post(self, draft: CreatePostRequest) -> str: ...


class BlogClient:
    """Async client for GET and POST /posts."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def list_posts(self) -> list[Post]:
        """Fetch all posts.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status.
            SchemaMismatch: If the body is not a valid post array.
        """
        resp = await self._client.get("/posts")
        resp.raise_for_status()
        posts = decode(resp.content)
        await log.adebug("posts_fetched", count=len(posts))
        return posts

    async def create_post(self, draft: CreatePostRequest) -> str:
        """Create a post and return the server's confirmation message."""
        resp = await self._client.post("/posts", json=draft.model_dump())
        resp.raise_for_status()
        message = CreatePostResponse.model_validate(resp.json()).message
        await log.ainfo("post_submitted", title=draft.title)
        return message
