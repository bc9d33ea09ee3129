"""
Advice records and composition.

An advice is a function attached to a named callable that runs around,
before, or after the original. Advice is stored as plain records and
composed into a single callable at call time, so detaching an advice
restores the previous behavior exactly.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing


class AdviceHow(_enum.Enum):
    """Where an advice function runs relative to the advised callable."""

    BEFORE = "before"
    """Called with the call arguments, then the original runs."""

    AFTER = "after"
    """Original runs first, then the advice is called with the same arguments."""

    AROUND = "around"
    """Called as advice(original, *args, **kwargs); it decides whether to delegate."""


@_dataclasses.dataclass(frozen=True)
class Advice:
    """
    A single piece of advice attached to a callable.

    Attributes:
        advice_id: Unique identifier assigned by the function table.
        callback_id: Name of the callable this advice is attached to.
        function: The advice function.
        how: Where the advice runs (see AdviceHow).
        name: Optional owner tag, used to find advice attached by one party.
    """

    advice_id: str
    callback_id: str
    function: _typing.Callable[..., _typing.Any]
    how: AdviceHow = AdviceHow.AROUND
    name: str | None = None


def _apply(
    advice: Advice,
    inner: _typing.Callable[..., _typing.Any],
) -> _typing.Callable[..., _typing.Any]:
    """Wrap inner with one advice record."""
    function = advice.function

    if advice.how == AdviceHow.BEFORE:

        def _before(*args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
            function(*args, **kwargs)
            return inner(*args, **kwargs)

        return _before

    if advice.how == AdviceHow.AFTER:

        def _after(*args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
            result = inner(*args, **kwargs)
            function(*args, **kwargs)
            return result

        return _after

    def _around(*args: _typing.Any, **kwargs: _typing.Any) -> _typing.Any:
        return function(inner, *args, **kwargs)

    return _around


def compose(
    original: _typing.Callable[..., _typing.Any],
    advices: _typing.Sequence[Advice],
) -> _typing.Callable[..., _typing.Any]:
    """
    Build the effective callable for an advised function.

    Advice is applied in attach order, so the most recently attached
    advice is the outermost layer and runs first.

    Args:
        original: The unadvised callable.
        advices: Advice records in attach order.

    Returns:
        A callable running the full advice chain around original.
    """
    effective = original
    for advice in advices:
        effective = _apply(advice, effective)
    return effective
