"""JSON text <-> Post records.

Decoding is all-or-nothing: a single malformed entry rejects the whole
document with SchemaMismatch.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from flatblog.errors import SchemaMismatch
from flatblog.models import CreatePostRequest, Post

_POSTS: TypeAdapter[list[Post]] = TypeAdapter(list[Post])


def decode(text: str | bytes) -> list[Post]:
    """Parse a JSON array of ``{id, title, body}`` objects."""
    try:
        return _POSTS.validate_json(text, strict=True)
    except ValidationError as exc:
        raise SchemaMismatch(_summarize(exc)) from exc


def encode(posts: Sequence[Post]) -> str:
    """Serialize posts as a compact JSON array with field order id, title, body."""
    return _POSTS.dump_json(list(posts)).decode()


def decode_draft(text: str | bytes) -> CreatePostRequest:
    """Parse a POST /posts body."""
    try:
        return CreatePostRequest.model_validate_json(text, strict=True)
    except ValidationError as exc:
        raise SchemaMismatch(_summarize(exc)) from exc


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{exc.error_count()} error(s), first at {loc}: {first['msg']}"
