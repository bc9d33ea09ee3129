"""
Reference host for hooktrace.

Provides the two host capabilities the tracing layer is built on:
a function table with advice (FunctionTable) and a hook registry with
in-order dispatch (HookRegistry). Both are plain objects so that tests
and applications can inject their own instances.
"""

from hooktrace.host.advice import Advice, AdviceHow, compose
from hooktrace.host.functions import FunctionTable
from hooktrace.host.registry import CallbackSpec, HookRegistry, normalize_callbacks

__all__ = [
    "Advice",
    "AdviceHow",
    "CallbackSpec",
    "FunctionTable",
    "HookRegistry",
    "compose",
    "normalize_callbacks",
]
