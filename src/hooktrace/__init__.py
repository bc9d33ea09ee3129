"""
Hooktrace - invocation logging for named hooks.

Wraps every callback bound to the selected hooks so each call is logged
as "<hook> - <callback>", without changing what the callbacks do or the
order they run in. All wrappers can be removed again.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("hooktrace")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from hooktrace.config import Settings  # noqa: E402
from hooktrace.defaults import (  # noqa: E402
    DefaultHost,
    get_default_host,
    instrument_callback,
    instrument_hooks,
    reset_default_host,
)
from hooktrace.errors import (  # noqa: E402
    HooktraceError,
    UnknownCallbackError,
    UnknownHookError,
)
from hooktrace.host import FunctionTable, HookRegistry  # noqa: E402
from hooktrace.tracing import AdviceWrapper, BufferSink, HookInstrumenter  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "AdviceWrapper",
    "BufferSink",
    "DefaultHost",
    "FunctionTable",
    "HookInstrumenter",
    "HookRegistry",
    "HooktraceError",
    "Settings",
    "UnknownCallbackError",
    "UnknownHookError",
    "get_default_host",
    "instrument_callback",
    "instrument_hooks",
    "reset_default_host",
]
