"""
Function table - a named callable namespace with advice support.

Callbacks are addressed by id rather than by Python object identity.
Every call made through the table runs the callable's current advice
chain, so attaching advice intercepts all callers that go through the
table (hook dispatch, direct calls, and proxies).
"""

from __future__ import annotations

import itertools as _itertools
import logging as _logging
import typing as _typing

import hooktrace.errors as errors
import hooktrace.host.advice as advice

_logger = _logging.getLogger(__name__)


class FunctionTable:
    """
    Registry of named callables and the advice attached to them.

    Advice is keyed by callback id, not by the callable object, so
    redefining a callback keeps its advice in place. Undefining a
    callback drops the callable together with all of its advice.
    """

    def __init__(self) -> None:
        self._functions: dict[str, _typing.Callable[..., _typing.Any]] = {}
        self._advice: dict[str, list[advice.Advice]] = {}
        self._counter = _itertools.count(1)

    # =========================================================================
    # Definitions
    # =========================================================================

    def define(
        self,
        callback_id: str,
        function: _typing.Callable[..., _typing.Any],
    ) -> None:
        """
        Bind a callable to an id, replacing any previous definition.

        Args:
            callback_id: Name to register the callable under.
            function: The callable.

        Raises:
            TypeError: If function is not callable.
        """
        if not callable(function):
            raise TypeError(f"Cannot define '{callback_id}': {function!r} is not callable")
        self._functions[callback_id] = function

    def undefine(self, callback_id: str) -> None:
        """Remove a callable and all of its advice. Unknown ids are ignored."""
        self._functions.pop(callback_id, None)
        dropped = self._advice.pop(callback_id, [])
        if dropped:
            _logger.debug(
                "Dropped %d advice record(s) with undefined callback '%s'",
                len(dropped),
                callback_id,
            )

    def is_defined(self, callback_id: str) -> bool:
        """Check whether an id names a defined callable."""
        return callback_id in self._functions

    def names(self) -> list[str]:
        """Sorted list of defined callback ids."""
        return sorted(self._functions)

    def get_original(self, callback_id: str) -> _typing.Callable[..., _typing.Any]:
        """
        Get the unadvised callable for an id.

        Raises:
            UnknownCallbackError: If the id is not defined.
        """
        try:
            return self._functions[callback_id]
        except KeyError:
            raise errors.UnknownCallbackError(callback_id) from None

    # =========================================================================
    # Invocation
    # =========================================================================

    def call(self, callback_id: str, *args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
        """
        Invoke a callable through its advice chain.

        Raises:
            UnknownCallbackError: If the id is not defined.
        """
        original = self.get_original(callback_id)
        chain = self._advice.get(callback_id)
        if not chain:
            return original(*args, **kwargs)
        return advice.compose(original, tuple(chain))(*args, **kwargs)

    def proxy(self, callback_id: str) -> _typing.Callable[..., _typing.Any]:
        """
        Get a callable that always calls the id through the table.

        The proxy resolves the definition and advice at call time, so it
        follows later redefinition and advice changes.
        """

        def _proxy(*args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
            return self.call(callback_id, *args, **kwargs)

        _proxy.__name__ = callback_id
        _proxy.__qualname__ = callback_id
        return _proxy

    # =========================================================================
    # Advice
    # =========================================================================

    def attach(
        self,
        callback_id: str,
        function: _typing.Callable[..., _typing.Any],
        *,
        how: advice.AdviceHow = advice.AdviceHow.AROUND,
        name: str | None = None,
    ) -> str:
        """
        Attach advice to a defined callable.

        Args:
            callback_id: Callable to advise.
            function: Advice function. AROUND advice receives the inner
                callable as its first argument.
            how: Where the advice runs.
            name: Optional owner tag.

        Returns:
            The new advice id.

        Raises:
            UnknownCallbackError: If the id is not defined.
        """
        if callback_id not in self._functions:
            raise errors.UnknownCallbackError(callback_id)

        advice_id = f"advice-{next(self._counter)}"
        record = advice.Advice(
            advice_id=advice_id,
            callback_id=callback_id,
            function=function,
            how=how,
            name=name,
        )
        self._advice.setdefault(callback_id, []).append(record)
        return advice_id

    def detach(self, advice_id: str) -> bool:
        """
        Remove one advice record.

        Returns:
            True if the advice was found and removed, False otherwise.
        """
        for callback_id, chain in self._advice.items():
            for index, record in enumerate(chain):
                if record.advice_id == advice_id:
                    del chain[index]
                    if not chain:
                        del self._advice[callback_id]
                    return True
        return False

    def advice_for(self, callback_id: str) -> list[advice.Advice]:
        """Advice records attached to an id, in attach order."""
        return list(self._advice.get(callback_id, ()))

    def list_attached(self, callback_id: str) -> list[str]:
        """Advice ids attached to an id, in attach order."""
        return [record.advice_id for record in self._advice.get(callback_id, ())]

    def __contains__(self, callback_id: object) -> bool:
        return callback_id in self._functions

    def __len__(self) -> int:
        return len(self._functions)
