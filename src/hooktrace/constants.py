"""
Shared constants for hooktrace.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

ADVICE_NAME = "hooktrace"
"""Owner tag put on every advice attached by the tracing layer."""

ENTRY_SEPARATOR = " - "
"""Separator between hook name and callback id in a trace entry."""

DEFAULT_LOG_TEMPLATE = "{hook_name}" + ENTRY_SEPARATOR + "{callback_id}"
"""Default trace entry template. Custom templates must keep this text."""

DEFAULT_TRACE_LOGGER = "hooktrace.trace"
"""Logger name used by the logger sink."""
