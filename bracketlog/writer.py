"""Append-only sink: one flat file per distinction under the log directory.

Each call opens, appends, flushes and closes the target file; nothing is held
between calls. I/O errors propagate unchanged to the caller.
"""

import os

from bracketlog.config import Config
from bracketlog.formatter import format_record
from bracketlog.models import LogDistinction


def _stem(distinction: LogDistinction | str) -> str:
    if isinstance(distinction, LogDistinction):
        return distinction.render()
    stem = distinction.strip().lower()
    # the stem names a file directly under log_path, never a sub-path
    if not stem or stem in (".", "..") or "/" in stem or "\\" in stem or os.sep in stem:
        raise ValueError(f"Invalid log category: {distinction!r}")
    return stem


def resolve_log_file(
    distinction: LogDistinction | str, log_path: str, log_format_extension: str
) -> str:
    """Return ``{log_path}/{distinction}.{log_format_extension}``."""
    return os.path.join(log_path, f"{_stem(distinction)}.{log_format_extension}")


def append_line(
    line: str,
    distinction: LogDistinction | str,
    log_path: str,
    log_format_extension: str,
) -> str:
    """Append *line* plus a newline to the distinction's file. Returns the path."""
    os.makedirs(log_path, exist_ok=True)
    path = resolve_log_file(distinction, log_path, log_format_extension)
    # single write per line so concurrent appenders never split a line
    with open(path, "a", encoding="utf-8", newline="\n") as f:
        f.write(line + "\n")
        f.flush()
    return path


def write_record(record, config: Config) -> str:
    """Serialize *record* and append it to the file for its distinction."""
    return append_line(
        format_record(record),
        record.distinction,
        config.log_path,
        config.log_format_extension,
    )


class LogSink:
    """Binds a Config to the sink functions. Holds no open files."""

    def __init__(self, config: Config):
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    def path_for(self, distinction: LogDistinction | str) -> str:
        return resolve_log_file(
            distinction, self._config.log_path, self._config.log_format_extension
        )

    def write(self, record) -> str:
        return write_record(record, self._config)

    def write_line(self, line: str, distinction: LogDistinction | str) -> str:
        return append_line(
            line, distinction, self._config.log_path, self._config.log_format_extension
        )
