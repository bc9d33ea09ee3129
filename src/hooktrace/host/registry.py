"""
Hook registry - named extension points and their callbacks.

A hook binding maps a hook name to the ordered callback ids that run
when the hook is dispatched. Bindings may be stored either as a single
callback id or as a sequence of ids; readers always see the normalized
tuple form through resolve().
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import hooktrace.errors as errors

if _typing.TYPE_CHECKING:
    import hooktrace.host.functions as host_functions

_logger = _logging.getLogger(__name__)

CallbackSpec = str | _typing.Sequence[str]
"""A hook binding as stored: one callback id, or an ordered sequence of ids."""


def normalize_callbacks(value: CallbackSpec) -> tuple[str, ...]:
    """
    Normalize a stored binding to an ordered tuple of unique callback ids.

    A single id becomes a one-element tuple. Duplicate ids keep their
    first position.

    Raises:
        TypeError: If value is neither a string nor a sequence of strings.
    """
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, _typing.Sequence):
        raise TypeError(f"Hook binding must be a callback id or a sequence of ids, got {value!r}")

    seen: dict[str, None] = {}
    for callback_id in value:
        if not isinstance(callback_id, str):
            raise TypeError(f"Callback ids must be strings, got {callback_id!r}")
        seen.setdefault(callback_id, None)
    return tuple(seen)


class HookRegistry:
    """
    Registry of hook bindings with in-order dispatch.

    Dispatch goes through the function table, so any advice attached
    to a callback runs when its hook is invoked.
    """

    def __init__(self, functions: host_functions.FunctionTable) -> None:
        self._functions = functions
        self._hooks: dict[str, CallbackSpec] = {}

    @property
    def functions(self) -> host_functions.FunctionTable:
        """The function table used for dispatch."""
        return self._functions

    def set(self, hook_name: str, callbacks: CallbackSpec) -> None:
        """
        Bind a hook to one callback id or a sequence of ids.

        The value is stored in the shape given; resolve() normalizes it.
        """
        normalize_callbacks(callbacks)
        if isinstance(callbacks, str):
            self._hooks[hook_name] = callbacks
        else:
            self._hooks[hook_name] = list(callbacks)

    def add(self, hook_name: str, callback_id: str, *, append: bool = True) -> None:
        """
        Add a callback to a hook if it is not already there.

        Args:
            hook_name: Hook to add to. Created if missing.
            callback_id: Callback to add.
            append: Add at the end (default) or at the front.
        """
        current = list(normalize_callbacks(self._hooks.get(hook_name, ())))
        if callback_id in current:
            return
        if append:
            current.append(callback_id)
        else:
            current.insert(0, callback_id)
        self._hooks[hook_name] = current

    def remove(self, hook_name: str, callback_id: str) -> None:
        """Remove a callback from a hook. Missing hooks or callbacks are ignored."""
        if hook_name not in self._hooks:
            return
        current = [c for c in normalize_callbacks(self._hooks[hook_name]) if c != callback_id]
        self._hooks[hook_name] = current

    def unbind(self, hook_name: str) -> None:
        """Remove a hook binding entirely. Unknown hooks are ignored."""
        self._hooks.pop(hook_name, None)

    def get(self, hook_name: str) -> CallbackSpec | None:
        """Raw stored binding, or None if the hook is not bound."""
        return self._hooks.get(hook_name)

    def resolve(self, hook_name: str) -> tuple[str, ...]:
        """
        Get the ordered callback ids bound to a hook.

        Raises:
            UnknownHookError: If the hook has no binding.
        """
        if hook_name not in self._hooks:
            raise errors.UnknownHookError(hook_name)
        return normalize_callbacks(self._hooks[hook_name])

    def invoke_all(
        self,
        hook_name: str,
        *args: _typing.Any,
        **kwargs: _typing.Any,
    ) -> list[_typing.Any]:
        """
        Call every callback bound to a hook, in order.

        Args:
            hook_name: Hook to dispatch.
            *args: Positional arguments passed to each callback.
            **kwargs: Keyword arguments passed to each callback.

        Returns:
            Callback return values, in call order.

        Raises:
            UnknownHookError: If the hook has no binding.
            UnknownCallbackError: If a bound id is not defined.
        """
        callback_ids = self.resolve(hook_name)
        _logger.debug("Dispatching hook '%s' to %d callback(s)", hook_name, len(callback_ids))
        return [self._functions.call(callback_id, *args, **kwargs) for callback_id in callback_ids]

    def names(self) -> list[str]:
        """Sorted list of bound hook names."""
        return sorted(self._hooks)

    def __contains__(self, hook_name: object) -> bool:
        return hook_name in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)
