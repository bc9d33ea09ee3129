"""
Instrumentation plan loading.

A plan names the hooks (and individual callbacks) to instrument and is
kept in a YAML file:

```yaml
version: 1
hooks:
  - after-save-hook
  - before-save-hook
callbacks:
  - callback: format-buffer
    hook: before-save-hook
```
"""

from __future__ import annotations

import pathlib as _pathlib

import pydantic as _pydantic
import yaml as _yaml


class CallbackTarget(_pydantic.BaseModel):
    """A single callback to instrument under a given hook name."""

    model_config = _pydantic.ConfigDict(extra="forbid")

    callback: str
    """Callback id to wrap."""

    hook: str
    """Hook name logged for each invocation."""


class InstrumentationConfig(_pydantic.BaseModel):
    """Complete instrumentation plan from a YAML file."""

    model_config = _pydantic.ConfigDict(extra="forbid")

    version: int = 1
    """Plan version (for future compatibility)."""

    hooks: list[str] = _pydantic.Field(default_factory=list)
    """Hook names whose callbacks are all instrumented."""

    callbacks: list[CallbackTarget] = _pydantic.Field(default_factory=list)
    """Individual callbacks instrumented under an explicit hook name."""

    @_pydantic.field_validator("hooks", mode="before")
    @classmethod
    def _accept_single_hook(cls, value: object) -> object:
        """Allow `hooks: some-hook` as shorthand for a one-item list."""
        if isinstance(value, str):
            return [value]
        return value


def load_instrumentation_yaml(path: _pathlib.Path) -> InstrumentationConfig:
    """
    Load an instrumentation plan from a YAML file.

    Args:
        path: Path to the plan file.

    Returns:
        Parsed InstrumentationConfig.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Instrumentation config not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = _yaml.safe_load(content) or {}
        return InstrumentationConfig.model_validate(data)
    except _yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except _pydantic.ValidationError as e:
        raise ValueError(f"Invalid instrumentation config in {path}: {e}") from e
