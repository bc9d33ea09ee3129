"""
Log sinks for trace entries.

A sink is an append-only text destination. The tracing layer only ever
calls append(text), once per callback invocation, in invocation order.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import hooktrace.constants as constants

if _typing.TYPE_CHECKING:
    import hooktrace.config as config


@_typing.runtime_checkable
class Appender(_typing.Protocol):
    """Anything that accepts appended trace text."""

    def append(self, text: str) -> None: ...


class BufferSink:
    """
    In-memory sink.

    Keeps every appended entry; useful for tests and for inspecting a
    trace after the fact.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def append(self, text: str) -> None:
        self._entries.append(text)

    @property
    def entries(self) -> list[str]:
        """Appended entries, oldest first."""
        return list(self._entries)

    def getvalue(self) -> str:
        """All entries joined as lines."""
        return "".join(f"{entry}\n" for entry in self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and text in self.getvalue()

    def __len__(self) -> int:
        return len(self._entries)


class StreamSink:
    """Writes one line per entry to a text stream (stderr by default)."""

    def __init__(self, stream: _typing.TextIO | None = None) -> None:
        self._stream = stream if stream is not None else _sys.stderr

    def append(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()


class FileSink:
    """
    Appends entries to a file, one per line.

    The file is opened lazily on the first entry and kept open until
    close(). Existing content is preserved.
    """

    def __init__(self, path: _pathlib.Path | str) -> None:
        self._path = _pathlib.Path(path)
        self._file: _typing.TextIO | None = None

    @property
    def path(self) -> _pathlib.Path:
        return self._path

    @property
    def is_open(self) -> bool:
        """Whether the underlying file handle is currently open."""
        return self._file is not None

    def append(self, text: str) -> None:
        if self._file is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Held as instance state, closed in close()
            self._file = open(self._path, "a", encoding="utf-8")  # noqa: SIM115
        self._file.write(text + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class LoggerSink:
    """Forwards entries to a stdlib logger at INFO level."""

    def __init__(self, logger: _logging.Logger | str = constants.DEFAULT_TRACE_LOGGER) -> None:
        if isinstance(logger, str):
            logger = _logging.getLogger(logger)
        self._logger = logger

    @property
    def logger(self) -> _logging.Logger:
        return self._logger

    def append(self, text: str) -> None:
        self._logger.info("%s", text)


def build_sink(settings: config.Settings) -> Appender:
    """
    Create the sink selected by settings.

    Args:
        settings: Settings with sink, log_file, and logger_name.

    Returns:
        A new sink instance. File sinks are owned by the caller and
        should be closed when tracing ends.
    """
    if settings.sink == "file":
        if settings.log_file is None:
            raise ValueError("log_file must be set when sink is 'file'")
        return FileSink(settings.log_file)
    if settings.sink == "stream":
        return StreamSink()
    if settings.sink == "logger":
        return LoggerSink(settings.logger_name)
    return BufferSink()
