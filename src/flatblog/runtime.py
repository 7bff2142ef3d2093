"""Queue-driven client loop: one message at a time, effects as background tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import httpx
import structlog

from flatblog.blog_client import PostsApi
from flatblog.client_state import (
    CreatePost,
    CreatePostResponded,
    Effect,
    FetchPosts,
    GotPosts,
    Message,
    Model,
    OnRouteChange,
    SubscribeNavigation,
    init,
    update,
)
from flatblog.environment import Environment
from flatblog.errors import InvalidLocation, SchemaMismatch
from flatblog.metrics import client_messages_total
from flatblog.models import CreatePostRequest
from flatblog.routes import resolve

log = structlog.get_logger()


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class ClientRuntime:
    """Runs the client state machine against a backend and an Environment.

    Messages from user input, navigation and completed effects share one
    queue. Exceptions raised by effects or by navigation resolution are queued
    too and re-raised by the loop, which then stops. In-flight requests are
    never cancelled by navigation; their responses still update the model.
    """

    def __init__(self, api: PostsApi, environment: Environment) -> None:
        self._api = api
        self._env = environment
        self._queue: asyncio.Queue[Message | BaseException] = asyncio.Queue()
        self._inflight: set[asyncio.Task[None]] = set()
        self._unsubscribe: Callable[[], None] | None = None
        self._model: Model | None = None

    @property
    def model(self) -> Model:
        if self._model is None:
            raise RuntimeError("ClientRuntime.start() has not been called")
        return self._model

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    async def start(self) -> Model:
        """Resolve the current location, build the model and issue startup effects.

        Raises:
            InvalidLocation: If the starting location names a non-integer post id.
        """
        route = resolve(self._env.current_location())
        self._model, effects = init(route)
        self._run_effects(effects)
        await log.ainfo("client_started", route=route.path)
        return self._model

    def dispatch(self, message: Message) -> None:
        self._queue.put_nowait(message)

    async def step(self) -> Model:
        """Process the next queued message, waiting for one if necessary."""
        item = await self._queue.get()
        if isinstance(item, BaseException):
            raise item
        self._model, effects = update(self.model, item)
        client_messages_total.add(1, {"message": type(item).__name__})
        self._run_effects(effects)
        return self._model

    async def run_until_idle(self) -> Model:
        """Step until no message is queued and no effect is in flight."""
        while True:
            if not self._queue.empty():
                await self.step()
                continue
            if not self._inflight:
                return self.model
            await asyncio.wait(self._inflight, return_when=asyncio.FIRST_COMPLETED)

    async def run_forever(self) -> None:
        while True:
            await self.step()

    async def aclose(self) -> None:
        """Cancel in-flight effects and drop the navigation subscription."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # -- Effects --

    def _run_effects(self, effects: list[Effect]) -> None:
        for effect in effects:
            match effect:
                case SubscribeNavigation():
                    if self._unsubscribe is None:
                        self._unsubscribe = self._env.subscribe(self._on_location)
                case FetchPosts():
                    self._spawn(self._fetch_posts())
                case CreatePost(draft=draft):
                    self._spawn(self._create_post(draft))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._on_effect_done)

    def _on_effect_done(self, task: asyncio.Task[None]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._queue.put_nowait(exc)

    def _on_location(self, location: str) -> None:
        try:
            route = resolve(location)
        except InvalidLocation as exc:
            self._queue.put_nowait(exc)
            return
        self.dispatch(OnRouteChange(route=route))

    async def _fetch_posts(self) -> None:
        try:
            posts = await self._api.list_posts()
        except (httpx.HTTPError, SchemaMismatch) as exc:
            await log.awarning("fetch_posts_failed", error=_describe(exc))
            self.dispatch(GotPosts(error=_describe(exc)))
            return
        self.dispatch(GotPosts(posts=tuple(posts)))

    async def _create_post(self, draft: CreatePostRequest) -> None:
        # ValueError covers a 2xx body that is not the expected JSON message
        try:
            await self._api.create_post(draft)
        except (httpx.HTTPError, ValueError) as exc:
            await log.awarning("create_post_failed", error=_describe(exc))
            self.dispatch(CreatePostResponded(ok=False, error=_describe(exc)))
            return
        self.dispatch(CreatePostResponded(ok=True))
