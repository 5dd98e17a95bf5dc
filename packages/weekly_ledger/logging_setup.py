"""Logging for ``weekly_ledger``.

Every module logs through a child of the ``"weekly_ledger"`` logger obtained
with :func:`get_logger`. Until :func:`configure_logging` runs, that tree only
carries a ``NullHandler``, so importing the pipeline as a library prints
nothing. The CLI configures output once per process; pipeline modules never
add handlers of their own.

Log lines are ``event:name key=value`` pairs, e.g.
``build_ledger:done income=3 spending=2 columns=5 rows=2 hidden_rows=0``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_ROOT_NAME = "weekly_ledger"
_LEVEL_ENV_VAR = "WEEKLY_LEDGER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _level_from_name(name: str) -> int | None:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    """Resolve ``level``, then ``WEEKLY_LEDGER_LOG_LEVEL``, then INFO.

    Unknown names at either step are skipped rather than rejected.
    """

    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        if candidate:
            parsed = _level_from_name(candidate)
            if parsed is not None:
                return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
    force: bool = False,
) -> logging.Logger:
    """Send ``weekly_ledger`` log records to ``stream``.

    Later calls are no-ops unless ``force`` is set, in which case the handler
    installed earlier is replaced (used to re-point output, e.g. in tests).
    Records do not propagate to the root logger, so a host application's own
    handlers never print them twice.
    """

    global _handler
    root = logging.getLogger(_ROOT_NAME)
    if _handler is not None and not force:
        return root

    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler) or h is _handler:
            root.removeHandler(h)

    resolved = _parse_level(level)
    _handler = logging.StreamHandler(stream)
    _handler.setLevel(resolved)
    _handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    root.setLevel(resolved)
    root.addHandler(_handler)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a pipeline module, e.g. ``get_logger("weekly_ledger.rows")``."""

    root = logging.getLogger(_ROOT_NAME)
    if _handler is None and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
