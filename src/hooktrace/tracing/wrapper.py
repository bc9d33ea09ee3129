"""
Advice wrapper - attaches logging interception to single callbacks.

Each instrumented callback gets exactly one AROUND advice tagged with
the hooktrace owner name. The advice appends a trace entry to the sink
and then delegates to the original callable, passing arguments, return
values, and exceptions through unchanged.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import datetime as _datetime
import logging as _logging
import typing as _typing

import hooktrace.constants as constants
import hooktrace.errors as errors
import hooktrace.host.advice as advice

if _typing.TYPE_CHECKING:
    import hooktrace.host.functions as host_functions
    import hooktrace.tracing.sink as sink_module

_logger = _logging.getLogger(__name__)


def validate_log_template(template: str) -> str:
    """
    Check that a trace entry template is usable.

    Templates must contain the canonical "{hook_name} - {callback_id}"
    text and may use no other replacement fields.

    Returns:
        The template, unchanged.

    Raises:
        ValueError: If the template is missing the canonical text or
            references unknown fields.
    """
    if constants.DEFAULT_LOG_TEMPLATE not in template:
        raise ValueError(f"log_template must contain '{constants.DEFAULT_LOG_TEMPLATE}'")
    try:
        template.format(hook_name="", callback_id="")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(
            f"log_template may only use {{hook_name}} and {{callback_id}}: {e}"
        ) from e
    return template


@_dataclasses.dataclass
class _Installation:
    """A wrapper this instance attached, and the hook name it logs."""

    advice_id: str
    hook_name: str


class AdviceWrapper:
    """
    Installs and removes logging wrappers on callbacks.

    The wrapper keeps its own record of what it installed. Installing a
    callback that already has a live wrapper reuses it, so a callback
    never carries more than one logging wrapper. When the same callback
    is installed under a different hook name, the last-bound hook name
    is the one that gets logged.
    """

    def __init__(
        self,
        functions: host_functions.FunctionTable,
        sink: sink_module.Appender,
        *,
        template: str = constants.DEFAULT_LOG_TEMPLATE,
        timestamps: bool = False,
    ) -> None:
        """
        Initialize the wrapper.

        Args:
            functions: Function table holding the callbacks to advise.
            sink: Destination for trace entries.
            template: Entry template with {hook_name} and {callback_id}.
            timestamps: Prefix entries with an ISO-8601 timestamp.

        Raises:
            ValueError: If the template is not a valid entry template.
        """
        self._functions = functions
        self._sink = sink
        self._template = validate_log_template(template)
        self._timestamps = timestamps
        self._installed: dict[str, _Installation] = {}

    @property
    def sink(self) -> sink_module.Appender:
        return self._sink

    @property
    def functions(self) -> host_functions.FunctionTable:
        return self._functions

    def format_entry(self, hook_name: str, callback_id: str) -> str:
        """Render the trace entry for one invocation."""
        entry = self._template.format(hook_name=hook_name, callback_id=callback_id)
        if self._timestamps:
            entry = f"[{_datetime.datetime.now().isoformat()}] {entry}"
        return entry

    def install(self, callback_id: str, hook_name: str) -> str:
        """
        Attach a logging wrapper to a callback.

        Args:
            callback_id: Callback to wrap.
            hook_name: Hook name to log for each invocation.

        Returns:
            Advice id of the (new or existing) wrapper.

        Raises:
            UnknownCallbackError: If the callback is not defined.
        """
        if not self._functions.is_defined(callback_id):
            raise errors.UnknownCallbackError(callback_id)

        existing = self._installed.get(callback_id)
        if existing is not None:
            if existing.advice_id in self._functions.list_attached(callback_id):
                if existing.hook_name != hook_name:
                    _logger.debug(
                        "Rebinding '%s' from hook '%s' to '%s'",
                        callback_id,
                        existing.hook_name,
                        hook_name,
                    )
                    existing.hook_name = hook_name
                return existing.advice_id
            # Advice vanished (callback undefined and redefined)
            del self._installed[callback_id]

        # Take over wrappers another instance left on the same table
        for stale_id in self.list_wrappers(callback_id):
            self._functions.detach(stale_id)
            _logger.debug("Replaced wrapper %s on '%s'", stale_id, callback_id)

        installation = _Installation(advice_id="", hook_name=hook_name)

        def _log_call(
            original: _typing.Callable[..., _typing.Any],
            *args: _typing.Any,
            **kwargs: _typing.Any,
        ) -> _typing.Any:
            self._sink.append(self.format_entry(installation.hook_name, callback_id))
            return original(*args, **kwargs)

        installation.advice_id = self._functions.attach(
            callback_id,
            _log_call,
            how=advice.AdviceHow.AROUND,
            name=constants.ADVICE_NAME,
        )
        self._installed[callback_id] = installation
        _logger.debug(
            "Installed wrapper %s on '%s' for hook '%s'",
            installation.advice_id,
            callback_id,
            hook_name,
        )
        return installation.advice_id

    def uninstall(self, callback_id: str) -> int:
        """
        Remove every hooktrace wrapper from a callback.

        Safe to call on a callback with no wrappers, and on a callback
        that was undefined after it was installed.

        Returns:
            Number of wrappers removed.

        Raises:
            UnknownCallbackError: If the callback is neither defined nor
                known to this wrapper.
        """
        record = self._installed.pop(callback_id, None)
        if not self._functions.is_defined(callback_id):
            if record is None:
                raise errors.UnknownCallbackError(callback_id)
            return 0

        removed = 0
        for attached in self._functions.advice_for(callback_id):
            if attached.name == constants.ADVICE_NAME and self._functions.detach(attached.advice_id):
                removed += 1

        if removed:
            _logger.debug("Removed %d wrapper(s) from '%s'", removed, callback_id)
        return removed

    def list_wrappers(self, callback_id: str) -> list[str]:
        """Advice ids of hooktrace wrappers on a callback, in attach order."""
        return [
            attached.advice_id
            for attached in self._functions.advice_for(callback_id)
            if attached.name == constants.ADVICE_NAME
        ]

    def is_installed(self, callback_id: str) -> bool:
        """Whether this wrapper has a live installation on the callback."""
        record = self._installed.get(callback_id)
        return record is not None and record.advice_id in self._functions.list_attached(callback_id)

    def installed(self) -> dict[str, str]:
        """Callbacks this wrapper installed, mapped to the hook name they log."""
        return {callback_id: record.hook_name for callback_id, record in self._installed.items()}
