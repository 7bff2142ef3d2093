"""Plain-text rendering of the client model."""

from __future__ import annotations

from flatblog.client_state import Model
from flatblog.errors import PostNotFound
from flatblog.routes import About, Home, NotFound, ShowPost

ABOUT_TEXT = "A small blog whose posts live in a single JSON file."


def _nav() -> str:
    return "[/] Home  [/about] About"


def _home(model: Model) -> list[str]:
    lines = ["Posts"]
    if not model.posts:
        lines.append("  (no posts yet)")
    lines.extend(f"  [/post/{post.id}] {post.title}" for post in model.posts)
    lines += [
        "",
        "New post",
        f"  title: {model.title_draft}",
        f"  body:  {model.body_draft}",
    ]
    return lines


def render(model: Model) -> str:
    """Render the current route.

    Raises:
        PostNotFound: If the route is a post that is not in model.posts.
    """
    match model.route:
        case Home():
            body = _home(model)
        case About():
            body = ["About", ABOUT_TEXT]
        case ShowPost(post_id=post_id):
            post = model.find_post(post_id)
            if post is None:
                raise PostNotFound(post_id)
            body = [post.title, "", post.body]
        case NotFound():
            body = ["Page not found"]
    return "\n".join([_nav(), "", *body])
