"""Logger helpers shared by the ruml modules and CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "ruml"
_STREAM_FORMAT = "[ruml] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the ruml handlers and return the package root logger.

    Records go to stderr at WARNING, or DEBUG with ``verbose``, since stdout
    carries the diagram. ``log_file`` additionally receives every DEBUG
    record. Calling this again replaces the handlers installed earlier.
    """
    stream_level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger(_ROOT)
    root.propagate = False
    root.setLevel(logging.DEBUG if log_file is not None else stream_level)

    for stale in list(root.handlers):
        root.removeHandler(stale)
        stale.close()

    stderr = logging.StreamHandler()
    stderr.setLevel(stream_level)
    stderr.setFormatter(logging.Formatter(_STREAM_FORMAT))
    root.addHandler(stderr)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        root.addHandler(sink)

    return root


__all__ = ["configure_logging", "get_logger"]
