"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with HOOKTRACE_ prefix
3. .env file (if HOOKTRACE_ENV_FILE points at one)
4. Field defaults

Examples:
  HOOKTRACE_SINK=file HOOKTRACE_LOG_FILE=/tmp/hooks.log
  HOOKTRACE_TIMESTAMPS=true
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import hooktrace.constants as constants
import hooktrace.tracing.wrapper as tracing_wrapper

SinkKind = _typing.Literal["buffer", "stream", "file", "logger"]


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only HOOKTRACE_ENV_FILE is honored; without it no .env is read and
    configuration comes from the environment alone.
    """
    if env_file := _os.environ.get("HOOKTRACE_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Hooktrace configuration settings.

    All settings can be overridden via environment variables with the
    HOOKTRACE_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="HOOKTRACE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_template: str = constants.DEFAULT_LOG_TEMPLATE
    """Template for trace entries, formatted with hook_name and callback_id."""

    timestamps: bool = False
    """Prefix each trace entry with an ISO-8601 timestamp."""

    sink: SinkKind = "buffer"
    """Where trace entries go: in-memory buffer, stderr, a file, or a logger."""

    log_file: _pathlib.Path | None = None
    """Trace file path (required when sink is 'file')."""

    logger_name: str = constants.DEFAULT_TRACE_LOGGER
    """Logger used when sink is 'logger'."""

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing configuration issues.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    @_pydantic.field_validator("log_template")
    @classmethod
    def _validate_log_template(cls, value: str) -> str:
        """Templates must render the canonical entry and use no other fields."""
        return tracing_wrapper.validate_log_template(value)

    @_pydantic.model_validator(mode="after")
    def _check_file_sink(self) -> "Settings":
        """A file sink needs somewhere to write."""
        if self.sink == "file" and self.log_file is None:
            raise ValueError("log_file must be set when sink is 'file'")
        return self
