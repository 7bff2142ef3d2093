"""Exception hierarchy for the post store and the blog client."""


class FlatblogError(Exception):
    """Base class for all flatblog errors."""


class StoreError(FlatblogError):
    """A post store or codec operation failed."""


class SchemaMismatch(StoreError):
    """JSON text does not have the expected post shape.

    Raised for the whole document: valid entries next to an invalid one are
    never returned.
    """


class ReadFailure(StoreError):
    """The store file is missing or could not be read."""


class WriteFailure(StoreError):
    """The store file could not be written."""


class ClientFatalError(FlatblogError):
    """An error that terminates the client loop."""


class InvalidLocation(ClientFatalError):
    """A location names a post with a non-integer id."""

    def __init__(self, location: str, segment: str) -> None:
        super().__init__(f"Invalid post id {segment!r} in location {location!r}")
        self.location = location
        self.segment = segment


class BackendUnavailable(ClientFatalError):
    """The post list could not be fetched from the backend."""


class PostNotFound(ClientFatalError):
    """The current route names a post that is not in the model."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} is not loaded")
        self.post_id = post_id
