"""Pydantic models for posts and the /posts request and response bodies."""

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """A persisted blog post. Field order is the on-disk field order."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: int = Field(ge=0, description="Number of posts in the store when this one was created")
    title: str
    body: str


class CreatePostRequest(BaseModel):
    """Body of POST /posts. Never persisted on its own."""

    model_config = ConfigDict(strict=True, frozen=True)

    title: str
    body: str


class CreatePostResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    message: str


CREATED_MESSAGE = "Successfully created post"
