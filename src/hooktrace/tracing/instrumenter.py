"""
Hook instrumenter - central coordinator for hook tracing.

The HookInstrumenter resolves hook names to their current callbacks and
drives the AdviceWrapper over every one of them. It remembers what it
installed so that any amount of instrumentation, including a batch that
failed part way, can be fully reversed.
"""

from __future__ import annotations

import contextlib as _contextlib
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import hooktrace.errors as errors
import hooktrace.tracing.config as tracing_config
import hooktrace.tracing.sink as tracing_sink
import hooktrace.tracing.wrapper as tracing_wrapper

if _typing.TYPE_CHECKING:
    import hooktrace.config as config
    import hooktrace.host.registry as host_registry

_logger = _logging.getLogger(__name__)

HookNames = str | _typing.Sequence[str]
"""One hook name or a sequence of hook names."""


def _as_names(hook_names: HookNames) -> list[str]:
    if isinstance(hook_names, str):
        return [hook_names]
    return list(hook_names)


class HookInstrumenter:
    """
    Instruments the callbacks of named hooks.

    Hooks in a batch are processed independently: a hook that fails to
    resolve does not stop its siblings from being instrumented. Hooks
    bound to a single callback and hooks bound to a list of callbacks
    go through the same path.
    """

    def __init__(
        self,
        registry: host_registry.HookRegistry,
        advice_wrapper: tracing_wrapper.AdviceWrapper,
        *,
        owns_sink: bool = False,
    ) -> None:
        """
        Initialize the instrumenter.

        Args:
            registry: Hook registry to resolve hook names against.
            advice_wrapper: Wrapper used to install logging advice.
            owns_sink: Close the wrapper's sink in close().
        """
        self._registry = registry
        self._wrapper = advice_wrapper
        self._owns_sink = owns_sink
        self._instrumented: dict[str, str] = {}

    @classmethod
    def from_settings(
        cls,
        registry: host_registry.HookRegistry,
        settings: config.Settings | None = None,
    ) -> HookInstrumenter:
        """
        Create an instrumenter whose sink and entry format come from Settings.

        Args:
            registry: Hook registry to instrument.
            settings: Settings to use. Loaded from the environment if None.

        Returns:
            Configured HookInstrumenter.
        """
        if settings is None:
            import hooktrace.config as config

            settings = config.Settings()

        advice_wrapper = tracing_wrapper.AdviceWrapper(
            registry.functions,
            tracing_sink.build_sink(settings),
            template=settings.log_template,
            timestamps=settings.timestamps,
        )
        return cls(registry, advice_wrapper, owns_sink=True)

    @property
    def registry(self) -> host_registry.HookRegistry:
        return self._registry

    @property
    def wrapper(self) -> tracing_wrapper.AdviceWrapper:
        return self._wrapper

    # =========================================================================
    # Instrumentation
    # =========================================================================

    def instrument_callback(self, callback_id: str, hook_name: str) -> None:
        """
        Instrument one callback under a hook name.

        Raises:
            UnknownCallbackError: If the callback is not defined.
        """
        self._wrapper.install(callback_id, hook_name)
        self._instrumented[callback_id] = hook_name

    def instrument_hooks(self, hook_names: HookNames) -> None:
        """
        Instrument every callback bound to each of the named hooks.

        Each hook's binding is read at call time, so callbacks added
        since an earlier call are picked up and already-instrumented
        callbacks keep their single wrapper.

        Args:
            hook_names: One hook name or a sequence of hook names.

        Raises:
            UnknownHookError: After the whole batch is processed, if any
                hook had no binding. Lists every missing hook.
            UnknownCallbackError: If a hook is bound to an undefined callback.
        """
        missing: list[str] = []

        for hook_name in _as_names(hook_names):
            try:
                callback_ids = self._registry.resolve(hook_name)
            except errors.UnknownHookError:
                _logger.warning("Cannot instrument unknown hook '%s'", hook_name)
                missing.append(hook_name)
                continue

            for callback_id in callback_ids:
                self.instrument_callback(callback_id, hook_name)

        if missing:
            raise errors.UnknownHookError(missing)

    def apply_config(
        self,
        plan: tracing_config.InstrumentationConfig | _pathlib.Path,
    ) -> None:
        """
        Instrument everything named in an instrumentation plan.

        Hooks are instrumented first, then individual callbacks. Unknown
        hooks are reported after the callbacks have been processed.

        Args:
            plan: A parsed plan, or a path to a YAML plan file.
        """
        if isinstance(plan, _pathlib.Path):
            plan = tracing_config.load_instrumentation_yaml(plan)

        hook_error: errors.UnknownHookError | None = None
        try:
            self.instrument_hooks(plan.hooks)
        except errors.UnknownHookError as e:
            hook_error = e

        for target in plan.callbacks:
            self.instrument_callback(target.callback, target.hook)

        if hook_error is not None:
            raise hook_error

    # =========================================================================
    # Removal
    # =========================================================================

    def uninstall_callback(self, callback_id: str) -> int:
        """
        Remove the logging wrapper from one callback.

        Returns:
            Number of wrappers removed.

        Raises:
            UnknownCallbackError: If the callback is undefined and was
                never instrumented here.
        """
        tracked = self._instrumented.pop(callback_id, None)
        try:
            return self._wrapper.uninstall(callback_id)
        except errors.UnknownCallbackError:
            # Undefined since we instrumented it; its advice went with it
            if tracked is None:
                raise
            return 0

    def uninstall_hooks(self, hook_names: HookNames) -> int:
        """
        Remove wrappers this instrumenter installed on the named hooks' callbacks.

        Unknown hooks are skipped.

        Returns:
            Number of wrappers removed.
        """
        removed = 0
        for hook_name in _as_names(hook_names):
            if hook_name not in self._registry:
                continue
            for callback_id in self._registry.resolve(hook_name):
                if callback_id in self._instrumented:
                    removed += self.uninstall_callback(callback_id)
        return removed

    def uninstall_all(self) -> int:
        """
        Remove every wrapper this instrumenter installed.

        Safe to call at any time, including after a partially failed batch.

        Returns:
            Number of wrappers removed.
        """
        removed = 0
        for callback_id in list(self._instrumented):
            removed += self.uninstall_callback(callback_id)
        return removed

    @_contextlib.contextmanager
    def tracing(self, hook_names: HookNames) -> _typing.Iterator[HookInstrumenter]:
        """
        Instrument hooks for the duration of a with-block.

        Everything installed is removed on exit, whether the block
        completes, raises, or instrumentation itself fails part way.
        """
        try:
            self.instrument_hooks(hook_names)
            yield self
        finally:
            self.uninstall_all()

    def close(self) -> None:
        """
        Remove every wrapper and release the sink if this instrumenter owns it.

        Instrumenters built by from_settings() own their sink. A sink
        passed in by the caller is left open.
        """
        self.uninstall_all()
        if not self._owns_sink:
            return
        close = getattr(self._wrapper.sink, "close", None)
        if callable(close):
            close()

    # =========================================================================
    # Inspection
    # =========================================================================

    def instrumented(self) -> dict[str, str]:
        """Instrumented callbacks mapped to the hook name they log."""
        return dict(self._instrumented)

    def list_wrappers(self, callback_id: str) -> list[str]:
        """Logging wrappers currently attached to a callback."""
        return self._wrapper.list_wrappers(callback_id)
