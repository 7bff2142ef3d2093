"""Client model, messages, effects and the update function.

``update`` is pure: it returns the next Model and the effects to run. The
runtime executes effects and feeds their completion back in as messages.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flatblog.errors import BackendUnavailable
from flatblog.models import CreatePostRequest, Post
from flatblog.routes import Route

RouteField = Annotated[Route, Field(discriminator="kind")]


class Model(BaseModel):
    model_config = ConfigDict(frozen=True)

    route: RouteField
    posts: tuple[Post, ...] = ()
    title_draft: str = ""
    body_draft: str = ""

    def find_post(self, post_id: int) -> Post | None:
        return next((p for p in self.posts if p.id == post_id), None)


# -- Messages --


class OnRouteChange(BaseModel):
    model_config = ConfigDict(frozen=True)
    route: RouteField


class GotPosts(BaseModel):
    """Completion of a list fetch: exactly one of posts or error is set."""

    model_config = ConfigDict(frozen=True)
    posts: tuple[Post, ...] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _one_outcome(self) -> GotPosts:
        if (self.posts is None) == (self.error is None):
            raise ValueError("GotPosts needs exactly one of posts or error")
        return self


class TitleUpdated(BaseModel):
    model_config = ConfigDict(frozen=True)
    value: str


class BodyUpdated(BaseModel):
    model_config = ConfigDict(frozen=True)
    value: str


class RequestCreatePost(BaseModel):
    model_config = ConfigDict(frozen=True)


class CreatePostResponded(BaseModel):
    model_config = ConfigDict(frozen=True)
    ok: bool
    error: str | None = None


Message = (
    OnRouteChange | GotPosts | TitleUpdated | BodyUpdated | RequestCreatePost | CreatePostResponded
)


# -- Effects --


class SubscribeNavigation(BaseModel):
    model_config = ConfigDict(frozen=True)


class FetchPosts(BaseModel):
    model_config = ConfigDict(frozen=True)


class CreatePost(BaseModel):
    model_config = ConfigDict(frozen=True)
    draft: CreatePostRequest


Effect = SubscribeNavigation | FetchPosts | CreatePost


def init(route: Route) -> tuple[Model, list[Effect]]:
    """Startup model plus the navigation subscription and initial fetch."""
    return Model(route=route), [SubscribeNavigation(), FetchPosts()]


def update(model: Model, message: Message) -> tuple[Model, list[Effect]]:
    """Apply one message.

    Raises:
        BackendUnavailable: On a failed post list fetch, which ends the client.
    """
    match message:
        case OnRouteChange(route=route):
            return model.model_copy(update={"route": route}), []
        case GotPosts(error=str() as error):
            raise BackendUnavailable(error)
        case GotPosts(posts=posts):
            return model.model_copy(update={"posts": posts}), []
        case TitleUpdated(value=value):
            return model.model_copy(update={"title_draft": value}), []
        case BodyUpdated(value=value):
            return model.model_copy(update={"body_draft": value}), []
        case RequestCreatePost():
            draft = CreatePostRequest(title=model.title_draft, body=model.body_draft)
            return model, [CreatePost(draft=draft)]
        case CreatePostResponded():
            return model, [FetchPosts()]
    raise TypeError(f"Unhandled message: {message!r}")
