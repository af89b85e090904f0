"""Logging for the ``statement_ingest`` package.

Library modules call ``get_logger("statement_ingest.<module>")`` and never
attach handlers. Entrypoints (the CLI, or the service hosting
:func:`statement_ingest.api.handle_upload`) call :func:`configure_logging`
once; until then the package logger carries only a ``NullHandler``.

The level comes from the explicit argument, else ``STATEMENT_INGEST_LOG_LEVEL``,
else ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "statement_ingest"
_LEVEL_ENV = "STATEMENT_INGEST_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from_name(name: str) -> int | None:
    # Numeric strings or standard level names (INFO/DEBUG/etc.).
    s = name.strip().upper()
    if s.isdigit():
        return int(s)
    numeric = getattr(logging, s, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(_LEVEL_ENV)):
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
) -> None:
    """Attach one ``StreamHandler`` to the package logger; later calls are no-ops."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, keeping the package silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
