"""Pipeline factories."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from seqflow.config import Settings
from seqflow.pipeline.context import Step
from seqflow.pipeline.executor import PipelineExecutor


def create_executor(steps: Iterable[Step], config: Settings | None = None) -> PipelineExecutor:
    """Build an executor whose defaults come from `config`."""
    settings = config.pipeline if config is not None else None
    return PipelineExecutor(steps, settings=settings)


def create_pipeline(steps: Iterable[Step], config: Settings | None = None) -> Callable[..., Awaitable[Any]]:
    """Return the `run` callable of a new executor over `steps`."""
    return create_executor(steps, config).run
