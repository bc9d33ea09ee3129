"""
Hook tracing for hooktrace.

Tracing wraps every callback of the selected hooks with a logging
advice, so each invocation appends "<hook> - <callback>" to a sink.

Example usage:
    from hooktrace.host import FunctionTable, HookRegistry
    from hooktrace.tracing import AdviceWrapper, BufferSink, HookInstrumenter

    functions = FunctionTable()
    registry = HookRegistry(functions)
    functions.define("foo-impl", lambda: None)
    registry.set("foo-hook", "foo-impl")

    sink = BufferSink()
    instrumenter = HookInstrumenter(registry, AdviceWrapper(functions, sink))
    with instrumenter.tracing(["foo-hook"]):
        registry.invoke_all("foo-hook")
    assert "foo-hook - foo-impl" in sink
"""

from hooktrace.tracing.config import (
    CallbackTarget,
    InstrumentationConfig,
    load_instrumentation_yaml,
)
from hooktrace.tracing.instrumenter import HookInstrumenter, HookNames
from hooktrace.tracing.sink import (
    Appender,
    BufferSink,
    FileSink,
    LoggerSink,
    StreamSink,
    build_sink,
)
from hooktrace.tracing.wrapper import AdviceWrapper

__all__ = [
    "AdviceWrapper",
    "Appender",
    "BufferSink",
    "CallbackTarget",
    "FileSink",
    "HookInstrumenter",
    "HookNames",
    "InstrumentationConfig",
    "LoggerSink",
    "StreamSink",
    "build_sink",
    "load_instrumentation_yaml",
]
