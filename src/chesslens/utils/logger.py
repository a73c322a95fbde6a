"""Logger configuration and convenience helpers."""

from __future__ import annotations

import logging
import sys

_DEFAULT_LOGGER_NAME = "chesslens"
_DEFAULT_LOG_LEVEL = logging.INFO
_DEFAULT_FORMATTER = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
_DEFAULT_HANDLER = logging.StreamHandler(sys.stdout)
_DEFAULT_HANDLER.setFormatter(_DEFAULT_FORMATTER)


def _configure_logger(logger: logging.Logger, level: int) -> None:
    """Attach the shared stdout handler once and stop propagation.

    The level is only applied when the logger has none of its own, so an
    explicit `set_level` call is never overridden by later lookups.
    """
    if logger.level == logging.NOTSET:
        logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_DEFAULT_HANDLER)
    logger.propagate = False


def _is_package_child(name: str) -> bool:
    return name.startswith(f"{_DEFAULT_LOGGER_NAME}.")


def get_logger(name: str | None = None, level: int = _DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Return a logger for the given name.

    Module loggers under the package namespace inherit level and handler from
    the package logger, so `set_level` on the package reaches all of them.
    """
    logger = logging.getLogger(name or _DEFAULT_LOGGER_NAME)
    if _is_package_child(logger.name):
        _configure_logger(logging.getLogger(_DEFAULT_LOGGER_NAME), level)
    else:
        _configure_logger(logger, level)
    return logger


def resolve_level(level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def set_level(level: int | str, logger_names: list[str] | None = None) -> None:
    """Set the log level for one or more logger names."""
    numeric = resolve_level(level)
    names = logger_names or [_DEFAULT_LOGGER_NAME]
    for name in names:
        logging.getLogger(name).setLevel(numeric)
