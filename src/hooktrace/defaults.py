"""
Process-wide default host and instrumenter.

Applications that do not inject their own tables share one function
table, one hook registry, and one instrumenter, created lazily from
Settings on first use.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import hooktrace.host.functions as host_functions
import hooktrace.host.registry as host_registry
import hooktrace.tracing.instrumenter as instrumenter

if _typing.TYPE_CHECKING:
    import hooktrace.config as config


@_dataclasses.dataclass(frozen=True)
class DefaultHost:
    """The shared function table, hook registry, and instrumenter."""

    functions: host_functions.FunctionTable
    registry: host_registry.HookRegistry
    instrumenter: instrumenter.HookInstrumenter


# Global default host
_default_host: DefaultHost | None = None


def create_default_host(settings: config.Settings | None = None) -> DefaultHost:
    """
    Create a new host bundle configured from Settings.

    Args:
        settings: Settings to use. Loaded from the environment if None.
    """
    functions = host_functions.FunctionTable()
    registry = host_registry.HookRegistry(functions)
    return DefaultHost(
        functions=functions,
        registry=registry,
        instrumenter=instrumenter.HookInstrumenter.from_settings(registry, settings),
    )


def get_default_host() -> DefaultHost:
    """
    Get the default host.

    The default host is lazily initialized on first use.
    """
    global _default_host
    if _default_host is None:
        _default_host = create_default_host()
    return _default_host


def reset_default_host() -> None:
    """Tear down and forget the default host, closing a sink it owns."""
    global _default_host
    if _default_host is not None:
        _default_host.instrumenter.close()
    _default_host = None


def instrument_callback(callback_id: str, hook_name: str) -> None:
    """Instrument one callback of the default host under a hook name."""
    get_default_host().instrumenter.instrument_callback(callback_id, hook_name)


def instrument_hooks(hook_names: instrumenter.HookNames) -> None:
    """Instrument every callback of the named hooks in the default host."""
    get_default_host().instrumenter.instrument_hooks(hook_names)
