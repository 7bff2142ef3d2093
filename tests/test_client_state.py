"""Tests for the client update function."""

import pytest
from pydantic import ValidationError

from flatblog.client_state import (
    BodyUpdated,
    CreatePost,
    CreatePostResponded,
    FetchPosts,
    GotPosts,
    Model,
    OnRouteChange,
    RequestCreatePost,
    SubscribeNavigation,
    TitleUpdated,
    init,
    update,
)
from flatblog.errors import BackendUnavailable
from flatblog.routes import About, Home, ShowPost
from tests.conftest import SAMPLE_POSTS, make_draft


def _model(**fields: object) -> Model:
    return Model(route=Home()).model_copy(update=fields)


def test_init_seeds_route_and_issues_startup_effects() -> None:
    model, effects = init(ShowPost(post_id=3))
    assert model == Model(route=ShowPost(post_id=3), posts=(), title_draft="", body_draft="")
    assert effects == [SubscribeNavigation(), FetchPosts()]


def test_route_change() -> None:
    model, effects = update(_model(), OnRouteChange(route=About()))
    assert model.route == About()
    assert effects == []


def test_got_posts_replaces_list() -> None:
    model, effects = update(_model(posts=(SAMPLE_POSTS[0],)), GotPosts(posts=SAMPLE_POSTS))
    assert model.posts == tuple(SAMPLE_POSTS)
    assert effects == []


def test_got_posts_error_is_fatal() -> None:
    with pytest.raises(BackendUnavailable, match="connection refused"):
        update(_model(), GotPosts(error="connection refused"))


def test_got_posts_needs_exactly_one_outcome() -> None:
    with pytest.raises(ValidationError):
        GotPosts()
    with pytest.raises(ValidationError):
        GotPosts(posts=(), error="x")


def test_draft_updates() -> None:
    model, _ = update(_model(), TitleUpdated(value="Hi"))
    model, effects = update(model, BodyUpdated(value="There"))
    assert (model.title_draft, model.body_draft) == ("Hi", "There")
    assert effects == []


def test_request_create_uses_current_drafts() -> None:
    start = _model(title_draft="T", body_draft="B")
    model, effects = update(start, RequestCreatePost())
    assert model == start
    assert effects == [CreatePost(draft=make_draft("T", "B"))]


def test_request_create_allows_double_submission() -> None:
    model, first = update(_model(title_draft="T"), RequestCreatePost())
    _, second = update(model, RequestCreatePost())
    assert first == second


@pytest.mark.parametrize(
    "response", [CreatePostResponded(ok=True), CreatePostResponded(ok=False, error="422")]
)
def test_create_response_always_refetches(response: CreatePostResponded) -> None:
    start = _model(title_draft="T", body_draft="B")
    model, effects = update(start, response)
    assert model == start
    assert effects == [FetchPosts()]


def test_update_does_not_mutate_previous_model() -> None:
    start = _model()
    update(start, TitleUpdated(value="changed"))
    assert start.title_draft == ""


def test_model_is_frozen() -> None:
    with pytest.raises(ValidationError):
        _model().title_draft = "x"  # type: ignore[misc]


def test_find_post() -> None:
    model = _model(posts=tuple(SAMPLE_POSTS))
    assert model.find_post(1) == SAMPLE_POSTS[1]
    assert model.find_post(7) is None
