"""Application configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = frozenset({"critical", "error", "warning", "info", "debug"})


class Settings(BaseSettings):
    """Backend and client configuration loaded from FLATBLOG_* environment variables."""

    model_config = {"env_prefix": "FLATBLOG_"}

    # Store
    posts_path: str = Field(default="posts.json", description="JSON file holding all posts")
    create_store_if_missing: bool = Field(
        default=True, description="Write an empty array to posts_path at startup if absent"
    )
    serialize_writes: bool = Field(
        default=True,
        description="Serialize the read-append-write sequence of each create behind a lock",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8000, description="Server bind port")
    log_level: str = Field(default="info", description="Log level")
    cors_origins: str = Field(
        default="http://localhost:1234",
        description="Comma-separated origins allowed to call the API from a browser",
    )

    # Client
    api_url: str = Field(default="http://localhost:8000", description="Backend base URL")
    client_timeout: float = Field(default=10.0, description="Client request timeout in seconds")

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        if v.lower() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError(f"Port out of range: {v}")
        return v

    @field_validator("client_timeout")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("client_timeout must be positive")
        return v
