"""Logging initialization helpers."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from seqflow.config import Settings

PACKAGE_LOGGER = "seqflow"
EXECUTOR_LOGGER = "seqflow.pipeline.executor"


def _handlers(settings: Settings) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=str(settings.logging.format))
    handlers: list[logging.Handler] = []
    if settings.logging.console:
        handlers.append(logging.StreamHandler())
    file_path = settings.log_path
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                file_path,
                maxBytes=int(settings.logging.file_max_bytes),
                backupCount=int(settings.logging.file_backups),
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(settings: Settings, *, force: bool = False) -> logging.Logger:
    """Configure the `seqflow` logger hierarchy and return the package logger.

    Handlers are attached to the package logger without a level of their own,
    so the executor logger's level alone decides whether per-step trace records
    (`step start`, `pipeline done`) get through. With `step_level` unset the
    executor inherits the package level.

    Repeated calls are no-ops unless `force` is set, in which case the previous
    handlers are closed and replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(logger, "_seqflow_configured", False) and not force:
        return logger

    for old in logger.handlers:
        old.close()
    logger.handlers = _handlers(settings)
    logger.setLevel(settings.logging.level)
    logger.propagate = False

    step_level = settings.logging.step_level
    logging.getLogger(EXECUTOR_LOGGER).setLevel(step_level or logging.NOTSET)

    setattr(logger, "_seqflow_configured", True)
    return logger
