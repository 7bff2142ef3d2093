"""Command-line client: load posts, optionally submit one, print the current view."""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from flatblog.blog_client import BlogClient
from flatblog.client_state import BodyUpdated, Model, RequestCreatePost, TitleUpdated
from flatblog.config import Settings
from flatblog.environment import MemoryEnvironment
from flatblog.errors import ClientFatalError
from flatblog.runtime import ClientRuntime
from flatblog.telemetry import configure_logging
from flatblog.view import render

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="flatblog command-line client.")
    parser.add_argument(
        "location",
        nargs="?",
        default="/",
        help="Location to open, e.g. /, /about or /post/3 (default: /)",
    )
    parser.add_argument("--title", default=None, help="Title of a post to create")
    parser.add_argument("--body", default=None, help="Body of a post to create")
    parser.add_argument(
        "--api-url", default=None, help="Backend base URL (or FLATBLOG_API_URL env)"
    )
    return parser


async def run_client(
    runtime: ClientRuntime, title: str | None = None, body: str | None = None
) -> Model:
    """Load the initial posts, submit a post when title or body is given, settle."""
    await runtime.start()
    await runtime.run_until_idle()
    if title is not None or body is not None:
        runtime.dispatch(TitleUpdated(value=title or ""))
        runtime.dispatch(BodyUpdated(value=body or ""))
        runtime.dispatch(RequestCreatePost())
        await runtime.run_until_idle()
    return runtime.model


async def _amain(args: argparse.Namespace, settings: Settings) -> str:
    api = BlogClient(args.api_url or settings.api_url, timeout=settings.client_timeout)
    runtime = ClientRuntime(api, MemoryEnvironment(args.location))
    try:
        model = await run_client(runtime, args.title, args.body)
        return render(model)
    finally:
        await runtime.aclose()
        await api.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)
    try:
        output = asyncio.run(_amain(args, settings))
    except ClientFatalError as exc:
        log.error("client_terminated", error=type(exc).__name__, detail=str(exc))
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
