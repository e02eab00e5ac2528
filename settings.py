"""Application settings models."""

from __future__ import annotations

from functools import lru_cache

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class MongoSettings(BaseSettings):
    """Settings for MongoDB connection.

    Environment variables follow the ``MONGO_`` prefix. For example,
    ``MONGO_HOST`` and ``MONGO_PORT`` configure the connection host and port.
    ``MONGO_RANGE_CONFIG`` names the collection holding range scoped values and
    ``MONGO_FILE_REFS`` the collection mapping file ids to stored files.
    """

    host: str = "localhost"
    port: int = 27017
    username: str | None = None
    password: str | None = None
    database: str = "courseware"
    auth: str = "admin"

    range_config: str = "range_config"
    file_refs: str = "file_refs"

    model_config = ConfigDict(extra="ignore", env_prefix="MONGO_")


class Settings(BaseSettings):
    """Top level settings loaded from ``.env``.

    ``FILE_STORAGE_ROOT`` is the directory relative file paths stored in
    ``MONGO_FILE_REFS`` are resolved against.
    """

    debug: bool = False
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    file_storage_root: str = Field(default="./data/files", alias="FILE_STORAGE_ROOT")

    mongo: MongoSettings = Field(default_factory=MongoSettings)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> "Settings":
    """Return cached application settings."""

    return Settings()
