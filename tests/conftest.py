"""
Shared pytest fixtures for hooktrace tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import hooktrace.defaults as defaults
import hooktrace.host as host
import hooktrace.tracing as tracing

# Environment variables that affect Settings
ENV_KEYS_TO_CLEAR = [
    "HOOKTRACE_ENV_FILE",
    "HOOKTRACE_LOG_TEMPLATE",
    "HOOKTRACE_TIMESTAMPS",
    "HOOKTRACE_SINK",
    "HOOKTRACE_LOG_FILE",
    "HOOKTRACE_LOGGER_NAME",
]


# =============================================================================
# Environment
# =============================================================================


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """Return environment dict with hooktrace keys removed."""
    return {k: v for k, v in _os.environ.items() if k not in ENV_KEYS_TO_CLEAR}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture(autouse=True)
def _reset_default_host() -> _typing.Iterator[None]:
    """Keep the process-wide default host from leaking between tests."""
    defaults.reset_default_host()
    yield
    defaults.reset_default_host()


# =============================================================================
# Host and tracing
# =============================================================================


@_pytest.fixture
def functions() -> host.FunctionTable:
    """Empty function table."""
    return host.FunctionTable()


@_pytest.fixture
def registry(functions: host.FunctionTable) -> host.HookRegistry:
    """Empty hook registry dispatching through the functions fixture."""
    return host.HookRegistry(functions)


@_pytest.fixture
def sink() -> tracing.BufferSink:
    """In-memory trace sink."""
    return tracing.BufferSink()


@_pytest.fixture
def advice_wrapper(
    functions: host.FunctionTable,
    sink: tracing.BufferSink,
) -> tracing.AdviceWrapper:
    """Advice wrapper writing to the sink fixture."""
    return tracing.AdviceWrapper(functions, sink)


@_pytest.fixture
def instrumenter(
    registry: host.HookRegistry,
    advice_wrapper: tracing.AdviceWrapper,
) -> tracing.HookInstrumenter:
    """Instrumenter over the registry and advice_wrapper fixtures."""
    return tracing.HookInstrumenter(registry, advice_wrapper)


class FakeHooks:
    """
    Registers fake callbacks and hook bindings for a single test.

    Every fake callback records its calls in `calls` as
    (callback_id, args, kwargs) and returns `<callback_id>:result`
    unless given its own body.
    """

    def __init__(
        self,
        functions: host.FunctionTable,
        registry: host.HookRegistry,
        advice_wrapper: tracing.AdviceWrapper,
    ) -> None:
        self.functions = functions
        self.registry = registry
        self.advice_wrapper = advice_wrapper
        self.calls: list[tuple[str, tuple[_typing.Any, ...], dict[str, _typing.Any]]] = []
        self._callbacks: list[str] = []
        self._hooks: list[str] = []

    def callback(
        self,
        callback_id: str,
        body: _typing.Callable[..., _typing.Any] | None = None,
    ) -> str:
        """Define a recording callback and return its id."""

        def _fake(*args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
            self.calls.append((callback_id, args, kwargs))
            if body is not None:
                return body(*args, **kwargs)
            return f"{callback_id}:result"

        self.functions.define(callback_id, _fake)
        self._callbacks.append(callback_id)
        return callback_id

    def hook(self, hook_name: str, callbacks: host.CallbackSpec) -> str:
        """Bind a hook, defining any callbacks that don't exist yet."""
        ids = host.normalize_callbacks(callbacks)
        for callback_id in ids:
            if callback_id not in self.functions:
                self.callback(callback_id)
        self.registry.set(hook_name, callbacks)
        self._hooks.append(hook_name)
        return hook_name

    def called_ids(self) -> list[str]:
        return [callback_id for callback_id, _, _ in self.calls]

    def teardown(self) -> None:
        """Remove wrappers, bindings, and callbacks created by this builder."""
        for callback_id in self._callbacks:
            if callback_id in self.functions:
                self.advice_wrapper.uninstall(callback_id)
            self.functions.undefine(callback_id)
        for hook_name in self._hooks:
            self.registry.unbind(hook_name)


@_pytest.fixture
def fake_hooks(
    functions: host.FunctionTable,
    registry: host.HookRegistry,
    advice_wrapper: tracing.AdviceWrapper,
) -> _typing.Iterator[FakeHooks]:
    """
    Scoped builder for fake callbacks and hooks.

    Usage:
        def test_something(fake_hooks, instrumenter):
            fake_hooks.hook("foo-hook", "foo-impl")
            instrumenter.instrument_hooks(["foo-hook"])

    Bindings, callbacks, and wrappers are removed after the test,
    whatever its outcome.
    """
    builder = FakeHooks(functions, registry, advice_wrapper)
    try:
        yield builder
    finally:
        builder.teardown()
