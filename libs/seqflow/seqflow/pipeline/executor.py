"""Pipeline executor."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from seqflow.config import PipelineSettings
from seqflow.exceptions import ConfigurationError
from seqflow.pipeline.context import (
    DeriveNextInput,
    PipelineRun,
    RunState,
    Step,
    TransformResult,
    identity_transform,
    keep_carry,
)
from seqflow.utils.awaitables import maybe_await

logger = logging.getLogger(__name__)


class PipelineExecutor:
    """Run a fixed list of steps sequentially.

    In fail-fast mode the first exception raised by a step aborts the run and
    propagates unchanged. In settle-all mode every step runs; failures are
    collected and raised once at the end (a single failure as-is, several as
    `AggregateStepError`).
    """

    def __init__(self, steps: Iterable[Step], *, settings: PipelineSettings | None = None):
        self.steps: tuple[Step, ...] = tuple(steps)
        for index, step in enumerate(self.steps, start=1):
            if not callable(step):
                raise ConfigurationError(f"step {index} is not callable: {step!r}")
        # Field defaults only; env lookup happens when callers build the settings.
        self.settings = settings or PipelineSettings.model_construct()

    def __len__(self) -> int:
        return len(self.steps)

    async def __call__(
        self,
        input: Any = None,
        settle_all: bool | None = None,
        derive_next_input: DeriveNextInput | None = None,
        transform_result: TransformResult | None = None,
    ) -> Any:
        return await self.run(input, settle_all, derive_next_input, transform_result)

    async def run(
        self,
        input: Any = None,
        settle_all: bool | None = None,
        derive_next_input: DeriveNextInput | None = None,
        transform_result: TransformResult | None = None,
    ) -> Any:
        """Run every step and return the collapsed result.

        Returns the single result directly, None for an empty pipeline, or the
        ordered list of results otherwise.
        """
        outcome = await self.collect(input, settle_all, derive_next_input, transform_result)
        return outcome.unwrap()

    async def collect(
        self,
        input: Any = None,
        settle_all: bool | None = None,
        derive_next_input: DeriveNextInput | None = None,
        transform_result: TransformResult | None = None,
    ) -> PipelineRun:
        """Run every step and return the outcome without collapsing it.

        Fail-fast mode still raises the first step failure.
        """
        if settle_all is None:
            settle_all = bool(self.settings.settle_all)
        derive = derive_next_input or keep_carry
        transform = transform_result or identity_transform

        state = RunState(carry=input)
        total = len(self.steps)
        mode = "settle_all" if settle_all else "fail_fast"
        logger.debug("pipeline start (steps=%s, mode=%s)", total, mode)

        for index, step in enumerate(self.steps, start=1):
            logger.debug("step start (%s/%s, mode=%s)", index, total, mode)
            state.steps_run += 1
            if settle_all:
                try:
                    observed = await maybe_await(step(state.carry))
                except Exception as exc:
                    logger.warning("step failed (%s/%s): %s: %s", index, total, type(exc).__name__, exc)
                    state.record_failure(exc)
                    observed = exc
                else:
                    state.results.append(observed)
            else:
                raw = await maybe_await(step(state.carry))
                observed = await maybe_await(transform(raw, step))
                state.results.append(observed)
            state.carry = await maybe_await(derive(state.carry, observed))

        logger.debug(
            "pipeline done (steps=%s, results=%s, errors=%s)",
            total,
            len(state.results),
            len(state.errors),
        )
        return state.finish()
