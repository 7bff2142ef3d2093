"""File-backed post store: read-all, append, write-all, create."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager, nullcontext
from pathlib import Path

import structlog

from flatblog.codec import decode, encode
from flatblog.concurrency import WriteLock
from flatblog.errors import ReadFailure, WriteFailure
from flatblog.models import CreatePostRequest, Post

log = structlog.get_logger()


def append(posts: Sequence[Post], draft: CreatePostRequest) -> list[Post]:
    """Return posts with a new post appended; its id is the current length.

    The id is derived from the snapshot passed in, so two callers holding the
    same snapshot assign the same id.
    """
    return [*posts, Post(id=len(posts), title=draft.title, body=draft.body)]


class PostStore:
    """Owns the JSON file. Nothing is cached between calls.

    With ``locks`` set, ``create`` runs its read-append-write sequence under
    ``locks.acquire()``. Without it, concurrent creates can read
    the same snapshot and the last writer wins.
    """

    def __init__(self, path: str | Path, locks: WriteLock | None = None) -> None:
        self.path = Path(path)
        self._locks = locks

    @property
    def serialized(self) -> bool:
        return self._locks is not None

    def read_all(self) -> list[Post]:
        """Read and decode the whole file.

        Raises:
            ReadFailure: If the file is missing or unreadable.
            SchemaMismatch: If the content is not a valid post array.
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFailure(f"Cannot read {self.path}: {exc}") from exc
        return decode(text)

    def write_all(self, posts: Sequence[Post]) -> None:
        """Truncate the file and write the encoded posts. No rollback on partial write."""
        text = encode(posts)
        try:
            with self.path.open("w", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            raise WriteFailure(f"Cannot write {self.path}: {exc}") from exc

    def ensure_exists(self) -> bool:
        """Create the file holding an empty array if it is absent. Returns True if created."""
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.write_all([])
        log.info("post_store_initialized", path=str(self.path))
        return True

    def _writer_guard(self) -> AbstractAsyncContextManager[None]:
        if self._locks is None:
            return nullcontext()
        return self._locks.acquire()

    async def create(self, draft: CreatePostRequest) -> Post:
        """Append one post built from draft and persist the whole collection."""
        async with self._writer_guard():
            posts = await asyncio.to_thread(self.read_all)
            updated = append(posts, draft)
            await asyncio.to_thread(self.write_all, updated)
        post = updated[-1]
        await log.ainfo("post_created", post_id=post.id, path=str(self.path))
        return post
