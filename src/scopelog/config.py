"""Runtime configuration for scopelog."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Values can be overridden using environment variables prefixed with
    ``SCOPELOG_`` (e.g. ``SCOPELOG_STREAM=stderr``) or an optional ``.env``
    file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCOPELOG_",
        env_file=".env",
        extra="ignore",
    )

    # Where the middleware writes entries by default
    stream: Literal["stdout", "stderr"] = "stdout"
    # Hand each entry to the stream in a single write
    buffered: bool = True
    # Raise LogWriteError when the sink fails instead of only reporting it
    strict: bool = False
    # Keep walking past the failing scope down to the bottom of the stack
    outer_frames: bool = True
