"""Client-side routes and location resolution."""

from __future__ import annotations

import re
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from flatblog.errors import InvalidLocation

_INT_SEGMENT = re.compile(r"-?[0-9]+")


class Home(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["home"] = "home"

    @property
    def path(self) -> str:
        return "/"


class About(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["about"] = "about"

    @property
    def path(self) -> str:
        return "/about"


class ShowPost(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["post"] = "post"
    post_id: int

    @property
    def path(self) -> str:
        return f"/post/{self.post_id}"


class NotFound(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["not_found"] = "not_found"

    @property
    def path(self) -> str:
        return "/404"


Route = Home | About | ShowPost | NotFound


def path_segments(location: str) -> list[str]:
    """Non-empty path segments of a path or absolute URL; query and fragment are ignored."""
    return [segment for segment in urlsplit(location).path.split("/") if segment]


def resolve(location: str) -> Route:
    """Map a location to a Route.

    Locations come from the client's own navigation, so a post segment that is
    not an integer is treated as unreachable and raises InvalidLocation.
    """
    match path_segments(location):
        case []:
            return Home()
        case ["about"]:
            return About()
        case ["post", segment]:
            if not _INT_SEGMENT.fullmatch(segment):
                raise InvalidLocation(location, segment)
            return ShowPost(post_id=int(segment))
        case _:
            return NotFound()
