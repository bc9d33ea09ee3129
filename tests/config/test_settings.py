"""Tests for configuration settings."""

import os as _os
import pathlib as _pathlib
import unittest.mock as _mock

import pydantic as _pydantic
import pytest as _pytest

import hooktrace.config as config
import hooktrace.constants as constants


class TestSettingsDefaults:
    """Test Settings default values when environment is clean."""

    def test_defaults(self, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()

        assert settings.log_template == constants.DEFAULT_LOG_TEMPLATE
        assert settings.timestamps is False
        assert settings.sink == "buffer"
        assert settings.log_file is None
        assert settings.logger_name == constants.DEFAULT_TRACE_LOGGER


class TestSettingsEnvironment:
    """Test environment variable overrides."""

    def test_env_overrides(self, clean_env: dict[str, str], tmp_path: _pathlib.Path) -> None:
        env = {
            **clean_env,
            "HOOKTRACE_SINK": "file",
            "HOOKTRACE_LOG_FILE": str(tmp_path / "trace.log"),
            "HOOKTRACE_TIMESTAMPS": "true",
        }
        with _mock.patch.dict(_os.environ, env, clear=True):
            settings = config.Settings.construct_without_dotenv()

        assert settings.sink == "file"
        assert settings.log_file == tmp_path / "trace.log"
        assert settings.timestamps is True

    def test_env_file(self, clean_env: dict[str, str], tmp_path: _pathlib.Path) -> None:
        """Explicit .env files are read when passed in."""
        env_file = tmp_path / ".env"
        env_file.write_text("HOOKTRACE_LOGGER_NAME=from.dotenv\n", encoding="utf-8")

        with _mock.patch.dict(_os.environ, clean_env, clear=True):
            settings = config.Settings(_env_file=str(env_file))  # type: ignore[call-arg]

        assert settings.logger_name == "from.dotenv"


class TestSettingsValidation:
    """Test Settings validators."""

    def test_custom_template_keeps_canonical_text(self, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv(
                log_template=">> {hook_name} - {callback_id} <<",
            )
        assert settings.log_template == ">> {hook_name} - {callback_id} <<"

    def test_template_without_canonical_text_rejected(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(log_template="{callback_id} in {hook_name}")

    def test_template_with_unknown_field_rejected(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(
                log_template="{when} {hook_name} - {callback_id}",
            )

    def test_file_sink_requires_path(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError, match="log_file"):
            config.Settings.construct_without_dotenv(sink="file")

    def test_unknown_sink_rejected(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(sink="socket")
