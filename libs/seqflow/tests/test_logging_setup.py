from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from seqflow.config import LoggingSettings, Settings
from seqflow.pipeline.executor import PipelineExecutor
from seqflow.utils.logging_setup import EXECUTOR_LOGGER, PACKAGE_LOGGER, setup_logging


@pytest.fixture()
def seqflow_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    executor_logger = logging.getLogger(EXECUTOR_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate, executor_logger.level)
    if hasattr(logger, "_seqflow_configured"):
        delattr(logger, "_seqflow_configured")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers, logger.level, logger.propagate, executor_logger.level = saved
    if hasattr(logger, "_seqflow_configured"):
        delattr(logger, "_seqflow_configured")


async def _ok(carry):
    return carry


def test_setup_logging_adds_console_and_file_handlers(tmp_path, seqflow_logger) -> None:
    cfg = Settings(
        log_dir=str(tmp_path),
        logging=LoggingSettings(level="DEBUG", console=True, file="run.log"),
    )
    assert setup_logging(cfg) is seqflow_logger

    kinds = {type(h) for h in seqflow_logger.handlers}
    assert RotatingFileHandler in kinds
    assert logging.StreamHandler in kinds
    assert seqflow_logger.level == logging.DEBUG
    assert seqflow_logger.propagate is False


def test_setup_logging_is_idempotent_unless_forced(tmp_path, seqflow_logger) -> None:
    cfg = Settings(log_dir=str(tmp_path), logging=LoggingSettings(console=True, file=None))
    setup_logging(cfg)
    handlers = list(seqflow_logger.handlers)
    setup_logging(cfg)
    assert seqflow_logger.handlers == handlers

    setup_logging(cfg, force=True)
    assert seqflow_logger.handlers != handlers
    assert len(seqflow_logger.handlers) == 1


@pytest.mark.asyncio
async def test_step_level_enables_step_trace_only(tmp_path, seqflow_logger) -> None:
    cfg = Settings(
        log_dir=str(tmp_path),
        logging=LoggingSettings(level="INFO", step_level="DEBUG", console=False, file="run.log"),
    )
    setup_logging(cfg)
    logging.getLogger("seqflow.other").debug("package debug record")

    await PipelineExecutor([_ok, _ok]).run("in")

    text = (tmp_path / "run.log").read_text(encoding="utf-8")
    assert "step start (1/2, mode=fail_fast)" in text
    assert "step start (2/2, mode=fail_fast)" in text
    assert "package debug record" not in text


@pytest.mark.asyncio
async def test_step_trace_follows_package_level_without_step_level(tmp_path, seqflow_logger) -> None:
    cfg = Settings(
        log_dir=str(tmp_path),
        logging=LoggingSettings(level="INFO", step_level=None, console=False, file="run.log"),
    )
    setup_logging(cfg)

    await PipelineExecutor([_ok]).run("in")

    assert logging.getLogger(EXECUTOR_LOGGER).getEffectiveLevel() == logging.INFO
    assert "step start" not in (tmp_path / "run.log").read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_settle_all_failures_are_logged(caplog) -> None:
    async def fail(_):
        raise ValueError("bad input")

    with caplog.at_level(logging.WARNING, logger="seqflow"):
        with pytest.raises(ValueError):
            await PipelineExecutor([fail]).run(settle_all=True)

    assert any("step failed (1/1)" in r.getMessage() for r in caplog.records)
