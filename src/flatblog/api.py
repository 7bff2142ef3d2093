"""HTTP endpoints for listing and creating posts."""

import asyncio

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from flatblog.codec import decode_draft, encode
from flatblog.errors import StoreError
from flatblog.metrics import posts_created_total, posts_listed_total, store_errors_total
from flatblog.models import CREATED_MESSAGE
from flatblog.post_store import PostStore
from flatblog.telemetry import get_tracer

log = structlog.get_logger()
_tracer = get_tracer(__name__)

router = APIRouter()

POSTS_PATH = "/posts"
ALLOWED_METHODS = ("GET", "POST")


def _unprocessable() -> Response:
    """Every store, codec and request-body failure answers with the same bare 422."""
    return Response(status_code=422)


@router.get(POSTS_PATH)
async def list_posts(request: Request) -> Response:
    store: PostStore = request.app.state.store
    with _tracer.start_as_current_span("posts.list"):
        try:
            posts = await asyncio.to_thread(store.read_all)
        except StoreError as exc:
            store_errors_total.add(1, {"operation": "list", "error": type(exc).__name__})
            await log.awarning("posts_list_failed", error=type(exc).__name__, detail=str(exc))
            return _unprocessable()
    posts_listed_total.add(1)
    return Response(content=encode(posts), media_type="application/json")


@router.post(POSTS_PATH, response_model=None)
async def create_post(request: Request) -> Response | dict[str, str]:
    store: PostStore = request.app.state.store
    raw = await request.body()
    try:
        draft = decode_draft(raw)
    except StoreError as exc:
        store_errors_total.add(1, {"operation": "decode_request", "error": type(exc).__name__})
        await log.ainfo("post_request_rejected", detail=str(exc))
        return _unprocessable()

    with _tracer.start_as_current_span("posts.create"):
        try:
            post = await store.create(draft)
        except StoreError as exc:
            store_errors_total.add(1, {"operation": "create", "error": type(exc).__name__})
            await log.awarning("post_create_failed", error=type(exc).__name__, detail=str(exc))
            return _unprocessable()

    posts_created_total.add(1)
    await log.ainfo("post_request_accepted", post_id=post.id)
    return {"message": CREATED_MESSAGE}


async def posts_http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Answer any unsupported method on the collection with the full Allow list."""
    if exc.status_code == 405 and request.url.path == POSTS_PATH:
        return Response(status_code=405, headers={"Allow": ", ".join(ALLOWED_METHODS)})
    return await http_exception_handler(request, exc)
