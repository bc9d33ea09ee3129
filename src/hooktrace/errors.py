"""
Exceptions shared by the host tables and the tracing layer.
"""

from __future__ import annotations

import typing as _typing


class HooktraceError(Exception):
    """Base class for hooktrace errors."""

    pass


class UnknownCallbackError(HooktraceError, LookupError):
    """Raised when a callback id does not name a defined callable."""

    def __init__(self, callback_id: str) -> None:
        self.callback_id = callback_id
        super().__init__(f"Unknown callback '{callback_id}'")


class UnknownHookError(HooktraceError, LookupError):
    """
    Raised when one or more hook names have no binding.

    Attributes:
        hook_names: Every hook name that failed to resolve, in request order.
    """

    def __init__(self, hook_names: str | _typing.Sequence[str]) -> None:
        if isinstance(hook_names, str):
            hook_names = (hook_names,)
        self.hook_names: tuple[str, ...] = tuple(hook_names)
        names = ", ".join(f"'{name}'" for name in self.hook_names)
        noun = "hook" if len(self.hook_names) == 1 else "hooks"
        super().__init__(f"Unknown {noun}: {names}")
